"""Shared data models used across tunneldoc modules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class Severity(enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class RepairStatus(enum.Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MISSING = "missing"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProbeTarget:
    """A candidate (host, port) endpoint."""

    host: str
    port: int

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one reachability attempt."""

    target: ProbeTarget
    reachable: bool
    status_code: int | None = None
    response_headers: dict[str, str] | None = None
    error_message: str | None = None

    @property
    def cors_header(self) -> str | None:
        """The Access-Control-Allow-Origin value the server sent, if any."""
        if not self.response_headers:
            return None
        for name, value in self.response_headers.items():
            if name.lower() == "access-control-allow-origin":
                return value
        return None


@dataclass(frozen=True)
class CorsTrial:
    origin: str
    server_url: str


@dataclass(frozen=True)
class CorsOutcome:
    """Result of one preflight trial for a single origin."""

    origin: str
    allowed: bool
    allowed_origin_header: str | None = None
    message: str = ""


@dataclass
class CorsSection:
    """CORS phase results. ``skipped_reason`` is set when no trial ran."""

    server_url: str | None = None
    outcomes: list[CorsOutcome] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.allowed)


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


@dataclass
class ConfigIssue:
    """A detected misconfiguration. Never fatal."""

    check_id: str
    description: str
    file: Path | None = None
    severity: Severity = Severity.WARNING


@dataclass
class Recommendation:
    description: str
    check_id: str = ""


@dataclass
class ConfigNote:
    """Informational observation worth surfacing (scheme, router, scripts)."""

    description: str
    file: Path | None = None


@dataclass
class InspectionResult:
    issues: list[ConfigIssue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    notes: list[ConfigNote] = field(default_factory=list)

    def extend(self, other: InspectionResult) -> None:
        self.issues.extend(other.issues)
        self.recommendations.extend(other.recommendations)
        self.notes.extend(other.notes)


@dataclass
class DiagnosticReport:
    """Complete diagnostic report assembled from every phase."""

    probe_results: list[ProbeResult] = field(default_factory=list)
    cors: CorsSection = field(default_factory=CorsSection)
    issues: list[ConfigIssue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    notes: list[ConfigNote] = field(default_factory=list)
    troubleshooting_steps: list[str] = field(default_factory=list)
    phases_completed: list[str] = field(default_factory=list)

    @property
    def reachable(self) -> list[ProbeResult]:
        return [r for r in self.probe_results if r.reachable]

    @property
    def reachable_count(self) -> int:
        return len(self.reachable)

    @property
    def cors_success_count(self) -> int:
        return self.cors.success_count


# ---------------------------------------------------------------------------
# Repair
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BackupRecord:
    """Proof that a byte-identical pre-write copy exists on disk."""

    original_path: Path
    backup_path: Path
    timestamp_millis: int


@dataclass(frozen=True)
class ChangeLogEntry:
    """One semantic edit applied to a tracked configuration file."""

    file: Path
    description: str


@dataclass
class FileRepairOutcome:
    """What happened to one tracked file during a repair run."""

    path: Path
    status: RepairStatus
    changes: list[ChangeLogEntry] = field(default_factory=list)
    backup: BackupRecord | None = None
    error: str | None = None


@dataclass
class RepairLog:
    """Per-run accumulator for a repair: passed in, filled, handed back."""

    entries: list[ChangeLogEntry] = field(default_factory=list)
    backups: list[BackupRecord] = field(default_factory=list)
    files: list[FileRepairOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    script_path: Path | None = None

    @property
    def errors(self) -> list[FileRepairOutcome]:
        return [f for f in self.files if f.status == RepairStatus.ERROR]

    def record(self, outcome: FileRepairOutcome) -> None:
        self.files.append(outcome)
        self.entries.extend(outcome.changes)
        if outcome.backup is not None:
            self.backups.append(outcome.backup)
