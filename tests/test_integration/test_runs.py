"""Integration tests: full diagnostic and repair runs against a temp project."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from tunneldoc.core.config import TunnelDocConfig
from tunneldoc.core.models import RepairStatus
from tunneldoc.runner import NO_SERVER_REASON, run_diagnostics, run_repair


@pytest.fixture
def expo_project(tmp_path: Path) -> Path:
    """A project with every misconfiguration the repair run knows about."""
    (tmp_path / "app.json").write_text(json.dumps({
        "expo": {"name": "demo", "scheme": "demo"},
        "server": {"host": "localhost", "cors": {"origin": "http://localhost:19006"}},
    }, indent=2))
    (tmp_path / "package.json").write_text(json.dumps({
        "name": "demo",
        "scripts": {"start": "expo start"},
    }, indent=2))
    (tmp_path / "metro.config.js").write_text(
        "module.exports = { server: { host: 'localhost' } };\n"
    )
    return tmp_path


def _config(ports: list[int], origins: list[str] | None = None) -> TunnelDocConfig:
    config = TunnelDocConfig()
    config.probe.ports = ports
    config.probe.hosts = ["127.0.0.1"]
    if origins is not None:
        config.cors.origins = origins
    return config


class TestDiagnosticRun:
    def test_full_run_against_live_server(self, expo_project: Path, local_server, closed_port: int):
        server = local_server(allow_origin="https://app.tempo.build")
        config = _config([closed_port, server.port], ["https://app.tempo.build", "http://localhost:3000"])

        report = run_diagnostics(expo_project, config)

        assert report.phases_completed == ["inspection", "reachability", "cors"]
        assert report.reachable_count == 1
        assert report.cors.server_url.endswith(f":{server.port}")
        assert [o.allowed for o in report.cors.outcomes] == [True, False]
        assert {i.check_id for i in report.issues} >= {"CFG-001", "CFG-002", "CFG-003"}

    def test_cors_skipped_when_no_server(self, expo_project: Path, closed_port: int):
        report = run_diagnostics(expo_project, _config([closed_port]))

        assert report.reachable_count == 0
        assert report.cors.skipped
        assert report.cors.skipped_reason == NO_SERVER_REASON
        assert report.cors.outcomes == []

    def test_diagnostics_do_not_modify_files(self, expo_project: Path, closed_port: int):
        before = {p.name: p.read_bytes() for p in expo_project.iterdir()}

        run_diagnostics(expo_project, _config([closed_port]))

        after = {p.name: p.read_bytes() for p in expo_project.iterdir()}
        assert after == before

    def test_cancel_before_start(self, expo_project: Path):
        cancel = threading.Event()
        cancel.set()

        with patch("tunneldoc.runner.PortProber.probe_all") as probe_all:
            report = run_diagnostics(expo_project, _config([8081]), cancel=cancel)

        probe_all.assert_not_called()
        assert report.phases_completed == []
        assert report.issues == []

    def test_cancel_between_phases(self, expo_project: Path, closed_port: int):
        cancel = threading.Event()

        def inspect_then_cancel(self):
            cancel.set()
            return original_inspect(self)

        from tunneldoc.scanner.engine import ConfigInspector

        original_inspect = ConfigInspector.inspect
        with patch.object(ConfigInspector, "inspect", inspect_then_cancel):
            report = run_diagnostics(expo_project, _config([closed_port]), cancel=cancel)

        assert report.phases_completed == ["inspection"]
        assert report.probe_results == []
        assert report.cors.skipped
        assert report.issues


class TestRepairRun:
    def test_repair_then_rediagnose(self, expo_project: Path, closed_port: int):
        log = run_repair(expo_project, _config([closed_port]))

        app = json.loads((expo_project / "app.json").read_text())
        assert app["server"] == {"host": "0.0.0.0", "port": 8081}
        assert app["expo"]["extra"]["router"]["origin"] is False
        assert app["expo"]["name"] == "demo"
        assert len(log.backups) == 2
        assert log.script_path == expo_project / "scripts" / "start-with-tunnel.sh"
        assert log.script_path.exists()
        assert any("metro.config.js" in w for w in log.warnings)

        report = run_diagnostics(expo_project, _config([closed_port]))
        assert "CFG-001" not in {i.check_id for i in report.issues}
        assert "CFG-003" not in {i.check_id for i in report.issues}

    def test_repair_twice(self, expo_project: Path, closed_port: int):
        run_repair(expo_project, _config([closed_port]))
        snapshot = {p.name: p.read_bytes() for p in expo_project.glob("*.json")}

        second = run_repair(expo_project, _config([closed_port]))

        assert second.entries == []
        assert second.backups == []
        assert {p.name: p.read_bytes() for p in expo_project.glob("*.json")} == snapshot
        assert second.script_path.exists()

    def test_launch_script_failure_keeps_repair_log(self, expo_project: Path, closed_port: int):
        (expo_project / "scripts").write_text("not a directory")

        log = run_repair(expo_project, _config([closed_port]))

        assert log.script_path is None
        assert any(w.startswith("Could not write launch script") and "start-with-tunnel.sh" in w
                   for w in log.warnings)
        assert [f.status for f in log.files] == [RepairStatus.UPDATED, RepairStatus.UPDATED]
        assert len(log.backups) == 2
        assert (expo_project / "scripts").read_text() == "not a directory"

    def test_metro_without_host_is_not_warned(self, tmp_path: Path):
        (tmp_path / "metro.config.js").write_text("module.exports = { server: { port: 8081 } };\n")

        log = run_repair(tmp_path, TunnelDocConfig())

        assert not any("metro.config.js" in w for w in log.warnings)
