"""Config repairer: applies patch steps with backup-then-write discipline."""

from __future__ import annotations

import logging
from pathlib import Path

from tunneldoc.core.config import TunnelDocConfig, load_config
from tunneldoc.core.documents import dump_json_object, load_json_object
from tunneldoc.core.errors import BackupError, ConfigParseError
from tunneldoc.core.models import (
    ChangeLogEntry,
    FileRepairOutcome,
    RepairLog,
    RepairStatus,
)
from tunneldoc.fix.backup import BackupManager
from tunneldoc.fix.patches import APP_CONFIG_STEPS, PACKAGE_CONFIG_STEPS, PatchStep

logger = logging.getLogger(__name__)


class ConfigRepairer:
    """Patches app.json and package.json in the project directory.

    Every step is idempotent, so a second run over a repaired project records
    no changes and writes nothing. A file is written only when at least one
    step changed it, and only after a backup of the current bytes exists.
    """

    def __init__(
        self,
        project_path: Path | None = None,
        config: TunnelDocConfig | None = None,
        backups: BackupManager | None = None,
    ):
        self.project_path = (project_path or Path.cwd()).resolve()
        self.config = config or load_config(self.project_path)
        self.backups = backups or BackupManager()

    def repair(self, log: RepairLog | None = None) -> RepairLog:
        """Repair every tracked document, recording outcomes into *log*."""
        log = log if log is not None else RepairLog()
        settings = self.config.repair
        log.record(self.repair_file(self.project_path / settings.app_config, APP_CONFIG_STEPS, log))
        log.record(self.repair_file(self.project_path / settings.package_config, PACKAGE_CONFIG_STEPS, log))
        return log

    def repair_file(self, path: Path, steps: list[PatchStep], log: RepairLog) -> FileRepairOutcome:
        """Run *steps* over one document. Errors stay scoped to this file."""
        if not path.exists():
            log.warnings.append(f"{path.name} not found")
            logger.warning("%s not found, skipping", path)
            return FileRepairOutcome(path=path, status=RepairStatus.MISSING)

        try:
            doc = load_json_object(path)
            changes = [
                ChangeLogEntry(file=path, description=description)
                for description in (step(doc, path, self.config.repair) for step in steps)
                if description is not None
            ]
        except ConfigParseError as e:
            logger.error("%s", e)
            return FileRepairOutcome(path=path, status=RepairStatus.ERROR, error=str(e))
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            return FileRepairOutcome(
                path=path, status=RepairStatus.ERROR, error=f"Error reading {path.name}: {e}"
            )

        if not changes:
            logger.info("%s already has correct settings", path.name)
            return FileRepairOutcome(path=path, status=RepairStatus.UNCHANGED)

        try:
            record = self.backups.backup(path)
        except BackupError as e:
            logger.error("%s", e)
            return FileRepairOutcome(path=path, status=RepairStatus.ERROR, error=str(e))

        try:
            path.write_text(dump_json_object(doc), encoding="utf-8")
        except OSError as e:
            logger.error("Error writing %s: %s (backup at %s)", path, e, record.backup_path)
            return FileRepairOutcome(
                path=path,
                status=RepairStatus.ERROR,
                backup=record,
                error=f"Error writing {path.name}: {e}; original saved at {record.backup_path}",
            )

        logger.info("updated %s (%d change(s))", path.name, len(changes))
        return FileRepairOutcome(
            path=path,
            status=RepairStatus.UPDATED,
            changes=changes,
            backup=record,
        )
