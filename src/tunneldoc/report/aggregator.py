"""Merge probe, CORS, inspection and repair results into one report.

Everything here is a pure function of its inputs: the same results always
produce the same report and the same lines, in the same order.
"""

from __future__ import annotations

from tunneldoc.core.config import WILDCARD_HOST
from tunneldoc.core.models import (
    ConfigIssue,
    ConfigNote,
    CorsSection,
    DiagnosticReport,
    ProbeResult,
    Recommendation,
    RepairLog,
    RepairStatus,
    Severity,
)

START_COMMAND = f"EXPO_DEVTOOLS_LISTEN_ADDRESS={WILDCARD_HOST} npx expo start --tunnel"

STANDARD_TROUBLESHOOTING_STEPS = [
    f"Start dev server with tunnel and bind to all interfaces: {START_COMMAND}",
    "Check that tunnel URL is active and accessible",
    "Verify no browser extensions are blocking requests",
    "Try accessing from incognito mode",
    "Check firewall settings for the dev server ports",
]

NEXT_STEPS = [
    f"Start your dev server with external access: npm run start:tunnel (or {START_COMMAND})",
    'Look for the tunnel URL in the output: "Tunnel ready: https://your-project.exp.direct"',
    f'Verify the server is listening on {WILDCARD_HOST}: look for "Starting project on {WILDCARD_HOST}:8081"',
    "Test connectivity: tunneldoc diagnose",
    "If still having issues: try incognito mode, disable browser extensions, "
    "check firewall settings, restart the dev server",
]

RULE = "=" * 60


class ReportAggregator:
    """Builds :class:`DiagnosticReport` objects and renders them as text."""

    def aggregate(
        self,
        probe_results: list[ProbeResult],
        cors: CorsSection,
        issues: list[ConfigIssue],
        recommendations: list[Recommendation],
        notes: list[ConfigNote] | None = None,
        phases_completed: list[str] | None = None,
    ) -> DiagnosticReport:
        return DiagnosticReport(
            probe_results=list(probe_results),
            cors=cors,
            issues=list(issues),
            recommendations=list(recommendations),
            notes=list(notes or []),
            troubleshooting_steps=list(STANDARD_TROUBLESHOOTING_STEPS),
            phases_completed=list(phases_completed or []),
        )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def render_lines(self, report: DiagnosticReport) -> list[str]:
        lines: list[str] = []

        lines.append("SERVER ACCESSIBILITY:")
        reachable = report.reachable
        if not report.probe_results and "reachability" not in report.phases_completed:
            lines.append("  Reachability probes not run")
        elif not reachable:
            lines.append("  No accessible servers found!")
            lines.append("  Make sure to start your dev server first:")
            lines.append(f"     {START_COMMAND}")
        else:
            lines.append(f"  Found {len(reachable)} accessible server(s)")
            for result in reachable:
                lines.append(f"     {result.target.url} - CORS: {result.cors_header or 'None'}")

        lines.append("")
        lines.append("CORS TEST RESULTS:")
        cors = report.cors
        if cors.skipped:
            lines.append(f"  No CORS tests performed ({cors.skipped_reason})")
        else:
            lines.append(f"  Tested against: {cors.server_url}")
            lines.append(f"  Successful: {cors.success_count}/{len(cors.outcomes)}")
            for outcome in cors.outcomes:
                mark = "OK  " if outcome.allowed else "FAIL"
                lines.append(f"     {mark} {outcome.origin}: {outcome.message}")

        problems = [i for i in report.issues if i.severity != Severity.INFO]
        infos = [i for i in report.issues if i.severity == Severity.INFO]

        if problems:
            lines.append("")
            lines.append("CONFIGURATION ISSUES:")
            for issue in problems:
                lines.append(f"  - [{issue.check_id}] {issue.description}")

        if report.recommendations:
            lines.append("")
            lines.append("RECOMMENDATIONS:")
            for rec in report.recommendations:
                lines.append(f"  - {rec.description}")

        if infos or report.notes:
            lines.append("")
            lines.append("NOTES:")
            for issue in infos:
                lines.append(f"  - [{issue.check_id}] {issue.description}")
            for note in report.notes:
                first, *rest = note.description.splitlines() or [""]
                lines.append(f"  - {first}")
                lines.extend(f"      {line}" for line in rest)

        lines.append("")
        lines.append("STANDARD TROUBLESHOOTING STEPS:")
        for n, step in enumerate(report.troubleshooting_steps, start=1):
            lines.append(f"  {n}. {step}")

        return lines

    # ------------------------------------------------------------------
    # Repair
    # ------------------------------------------------------------------

    def render_repair_lines(self, log: RepairLog) -> list[str]:
        lines: list[str] = []

        lines.append("CHANGES MADE:")
        if not log.entries:
            lines.append("  No changes needed - configuration already optimal!")
        for entry in log.entries:
            lines.append(f"  - {entry.file.name}: {entry.description}")
        for outcome in log.files:
            if outcome.status == RepairStatus.UNCHANGED:
                lines.append(f"  {outcome.path.name} already has correct settings")

        if log.script_path is not None:
            lines.append("")
            lines.append(f"Launch script written: {log.script_path}")

        if log.errors:
            lines.append("")
            lines.append("ERRORS:")
            for outcome in log.errors:
                lines.append(f"  - {outcome.path}: {outcome.error}")

        if log.warnings:
            lines.append("")
            lines.append("WARNINGS:")
            for warning in log.warnings:
                lines.append(f"  - {warning}")

        lines.append("")
        lines.append(RULE)
        lines.append("NEXT STEPS")
        lines.append(RULE)
        for n, step in enumerate(NEXT_STEPS, start=1):
            lines.append(f"  {n}. {step}")

        if log.backups:
            lines.append("")
            lines.append("Backup files created:")
            for record in log.backups:
                lines.append(f"   {record.original_path} -> {record.backup_path}")

        return lines
