"""Config inspector: runs every configuration check without mutating anything."""

from __future__ import annotations

import logging
from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig, load_config
from tunneldoc.core.models import InspectionResult, Severity
from tunneldoc.scanner.checks import ALL_CHECKS
from tunneldoc.scanner.checks.base import ConfigCheck

logger = logging.getLogger(__name__)


class ConfigInspector:
    """Passive analysis of app.json, metro.config.js and package.json.

    Usage::

        inspector = ConfigInspector(project_path=Path("/my/app"))
        result = inspector.inspect()
        for issue in result.issues:
            print(issue.check_id, issue.description)
    """

    def __init__(
        self,
        project_path: Path | None = None,
        config: TunnelDocConfig | None = None,
        checks: list[type[ConfigCheck]] | None = None,
    ) -> None:
        self.project_path = (project_path or Path.cwd()).resolve()
        self.config = config or load_config(self.project_path)
        self._check_classes = checks or list(ALL_CHECKS)

    def inspect(self) -> InspectionResult:
        """Run every registered check and merge the results in registry order."""
        merged = InspectionResult()
        for check_cls in self._check_classes:
            check = check_cls()
            try:
                merged.extend(check.run(self.project_path, self.config))
            except Exception as e:
                # One broken check must not hide the others' findings.
                logger.warning("check %s failed: %s", check.check_id, e, exc_info=True)
                check._issue(
                    merged,
                    f"Check {check.check_id} ({check.description}) could not run: {e}",
                    severity=Severity.INFO,
                )
        return merged
