"""metro.config.js checks (CFG-002).

metro.config.js is executable JavaScript owned by the bundler, so it is not
parsed. The check is a plain substring test: any mention of ``server`` counts,
which also matches comments and unrelated identifiers. False positives are
accepted; the finding only asks the user to review the file.
"""

from __future__ import annotations

from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig
from tunneldoc.core.models import InspectionResult, Severity
from tunneldoc.scanner.checks.base import ConfigCheck

PREVIEW_LINES = 10


def mentions_server_settings(text: str, require_host: bool = False) -> bool:
    """Return True when *text* looks like it configures the dev server."""
    if "server" not in text:
        return False
    return "host" in text if require_host else True


class CFG002MetroServerOverride(ConfigCheck):
    """Detect Metro server settings that could shadow app.json."""

    check_id = "CFG-002"
    severity = Severity.WARNING
    description = "metro.config.js server override"

    def run(self, project_path: Path, config: TunnelDocConfig) -> InspectionResult:
        result = InspectionResult()
        name = config.repair.metro_config
        path = project_path / name

        if not path.exists():
            self._note(result, f"No {name} found (using defaults)", path)
            return result

        try:
            text = path.read_text(errors="replace")
        except OSError as e:
            self._issue(result, f"Error reading {name}: {e}", path)
            return result

        preview = "\n".join(text.splitlines()[:PREVIEW_LINES])
        self._note(result, f"{name} preview:\n{preview}", path)

        if mentions_server_settings(text):
            self._issue(result, f"Custom server config in {name} may override CORS settings", path)
            self._recommend(result, f"Review {name} for server settings that conflict with app.json")

        return result
