"""package.json checks (CFG-003)."""

from __future__ import annotations

from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig
from tunneldoc.core.documents import load_json_object
from tunneldoc.core.errors import ConfigParseError
from tunneldoc.core.models import InspectionResult, Severity
from tunneldoc.scanner.checks.base import ConfigCheck


class CFG003TunnelStartScript(ConfigCheck):
    """List start/dev scripts and flag when none starts a tunnel."""

    check_id = "CFG-003"
    severity = Severity.INFO
    description = "package.json tunnel start script"

    def run(self, project_path: Path, config: TunnelDocConfig) -> InspectionResult:
        result = InspectionResult()
        name = config.repair.package_config
        path = project_path / name

        try:
            package = load_json_object(path)
        except FileNotFoundError:
            return result
        except ConfigParseError as e:
            self._issue(result, f"Failed to parse {name}: {e.reason}", path, severity=Severity.WARNING)
            return result

        scripts = package.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}

        for script_name, command in scripts.items():
            if "start" in script_name or "dev" in script_name:
                self._note(result, f"{name} script {script_name}: {command}", path)

        if not any("--tunnel" in str(command) for command in scripts.values()):
            self._issue(result, f"No script in {name} starts the dev server with --tunnel", path)
            self._recommend(result, "Run `tunneldoc repair` to add start:tunnel and start:clean scripts")

        return result
