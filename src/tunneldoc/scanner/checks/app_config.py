"""app.json checks (CFG-001)."""

from __future__ import annotations

import json
from pathlib import Path

from tunneldoc.core.config import WILDCARD_HOST, TunnelDocConfig
from tunneldoc.core.documents import load_json_object
from tunneldoc.core.errors import ConfigParseError
from tunneldoc.core.models import InspectionResult, Severity
from tunneldoc.scanner.checks.base import ConfigCheck


class CFG001AppServerHost(ConfigCheck):
    """Flag a server host that is not bound to every interface."""

    check_id = "CFG-001"
    severity = Severity.WARNING
    description = "app.json server host"

    def run(self, project_path: Path, config: TunnelDocConfig) -> InspectionResult:
        result = InspectionResult()
        name = config.repair.app_config
        path = project_path / name

        try:
            app = load_json_object(path)
        except FileNotFoundError:
            self._issue(result, f"{name} not found", path, severity=Severity.INFO)
            return result
        except ConfigParseError as e:
            self._issue(result, f"Failed to parse {name}: {e.reason}", path)
            return result

        server = app.get("server")
        if isinstance(server, dict):
            self._note(result, f"Server config found: {json.dumps(server, sort_keys=True)}", path)
            host = server.get("host")
            # an empty host string is treated like an absent one
            if host and host != WILDCARD_HOST:
                self._issue(
                    result,
                    f"Server host is set to '{host}' instead of '{WILDCARD_HOST}'",
                    path,
                )
                self._recommend(
                    result,
                    f'Set server.host to "{WILDCARD_HOST}" in {name} for external access',
                )
        else:
            self._note(result, "No server config found", path)

        expo = app.get("expo")
        if isinstance(expo, dict):
            if expo.get("scheme"):
                self._note(result, f"URL scheme: {expo['scheme']}", path)
            extra = expo.get("extra")
            if isinstance(extra, dict) and extra.get("router") is not None:
                router = json.dumps(extra["router"], sort_keys=True)
                self._note(result, f"Router config: {router}", path)

        return result
