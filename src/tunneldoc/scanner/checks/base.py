"""Base check class for all configuration checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig
from tunneldoc.core.models import (
    ConfigIssue,
    ConfigNote,
    InspectionResult,
    Recommendation,
    Severity,
)


class ConfigCheck(ABC):
    """Abstract base class for read-only configuration checks.

    Each concrete check must define:
      - check_id   : unique identifier (e.g. "CFG-001")
      - severity   : default severity of the issues it raises
      - description: short human-readable description of what is checked

    ``run`` receives the project root and must never modify anything on disk.
    """

    check_id: str = ""
    severity: Severity = Severity.WARNING
    description: str = ""

    @abstractmethod
    def run(self, project_path: Path, config: TunnelDocConfig) -> InspectionResult:
        """Inspect the project and return issues, recommendations and notes."""
        ...

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _issue(
        self,
        result: InspectionResult,
        description: str,
        file_path: Path | None = None,
        severity: Severity | None = None,
    ) -> None:
        result.issues.append(ConfigIssue(
            check_id=self.check_id,
            description=description,
            file=file_path,
            severity=severity or self.severity,
        ))

    def _recommend(self, result: InspectionResult, description: str) -> None:
        result.recommendations.append(Recommendation(description=description, check_id=self.check_id))

    def _note(self, result: InspectionResult, description: str, file_path: Path | None = None) -> None:
        result.notes.append(ConfigNote(description=description, file=file_path))
