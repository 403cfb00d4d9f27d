"""Diagnostic and repair runs.

A diagnostic run is a sequence of phases (inspection, reachability, CORS).
Probes inside a phase may run concurrently but each phase hands back its
results in input order. Cancellation is honoured only between phases.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig, load_config
from tunneldoc.core.models import (
    CorsSection,
    DiagnosticReport,
    InspectionResult,
    ProbeResult,
    RepairLog,
)
from tunneldoc.fix.engine import ConfigRepairer
from tunneldoc.fix.script import ScriptGenerator
from tunneldoc.probe.cors import CorsValidator
from tunneldoc.probe.locator import ActiveServerLocator
from tunneldoc.probe.prober import PortProber
from tunneldoc.report.aggregator import ReportAggregator
from tunneldoc.scanner.checks.metro import mentions_server_settings
from tunneldoc.scanner.engine import ConfigInspector

logger = logging.getLogger(__name__)

NO_SERVER_REASON = "no active dev server found"


def run_diagnostics(
    project_path: Path | None = None,
    config: TunnelDocConfig | None = None,
    cancel: threading.Event | None = None,
) -> DiagnosticReport:
    """Read-only run: inspect config, probe ports, test CORS, build the report."""
    project_path = (project_path or Path.cwd()).resolve()
    config = config or load_config(project_path)
    completed: list[str] = []

    def cancelled(phase: str) -> bool:
        if cancel is not None and cancel.is_set():
            logger.info("cancelled before %s phase", phase)
            return True
        return False

    inspection = InspectionResult()
    probe_results: list[ProbeResult] = []
    cors = CorsSection(skipped_reason="cancelled before CORS phase")

    if not cancelled("inspection"):
        inspection = ConfigInspector(project_path, config).inspect()
        completed.append("inspection")

        prober = PortProber.from_config(config.probe)
        if not cancelled("reachability"):
            probe_results = prober.probe_all(config.probe.ports)
            completed.append("reachability")

            if not cancelled("cors"):
                cors = _cors_phase(prober, config)
                completed.append("cors")

    return ReportAggregator().aggregate(
        probe_results=probe_results,
        cors=cors,
        issues=inspection.issues,
        recommendations=inspection.recommendations,
        notes=inspection.notes,
        phases_completed=completed,
    )


def _cors_phase(prober: PortProber, config: TunnelDocConfig) -> CorsSection:
    server_url = ActiveServerLocator(prober, config.probe.ports).locate()
    if server_url is None:
        return CorsSection(skipped_reason=NO_SERVER_REASON)
    validator = CorsValidator.from_config(config.cors)
    return CorsSection(
        server_url=server_url,
        outcomes=validator.validate_all(server_url, config.cors.origins),
    )


def run_repair(
    project_path: Path | None = None,
    config: TunnelDocConfig | None = None,
    log: RepairLog | None = None,
) -> RepairLog:
    """Mutating run: patch config files, regenerate the launch script."""
    project_path = (project_path or Path.cwd()).resolve()
    config = config or load_config(project_path)

    log = ConfigRepairer(project_path, config).repair(log)
    _write_launch_script(project_path / config.repair.script_path, log)

    _check_metro_override(project_path, config, log)
    return log


def _write_launch_script(script_path: Path, log: RepairLog) -> None:
    try:
        log.script_path = ScriptGenerator(script_path).generate()
    except OSError as e:
        logger.error("Error writing launch script %s: %s", script_path, e)
        log.warnings.append(f"Could not write launch script {script_path}: {e}")


def _check_metro_override(project_path: Path, config: TunnelDocConfig, log: RepairLog) -> None:
    metro = project_path / config.repair.metro_config
    if not metro.exists():
        return
    try:
        text = metro.read_text(errors="replace")
    except OSError as e:
        log.warnings.append(f"Error reading {metro.name}: {e}")
        return
    if mentions_server_settings(text, require_host=True):
        log.warnings.append(
            f"{metro.name} contains server settings that might override {config.repair.app_config}; "
            "review it for conflicting server settings"
        )
