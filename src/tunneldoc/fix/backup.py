"""Pre-write backups of tracked configuration files."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Callable

from tunneldoc.core.errors import BackupError
from tunneldoc.core.models import BackupRecord

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


def backup_path_for(path: Path, timestamp_millis: int) -> Path:
    return path.with_name(f"{path.name}.backup.{timestamp_millis}")


class BackupManager:
    """Copies a file to ``<path>.backup.<epoch-millis>`` before it is rewritten.

    The destination is created exclusively: an existing file at the backup
    path is an error, never overwritten. Backups are left on disk.
    """

    def __init__(self, clock: Callable[[], int] = _now_millis):
        self._clock = clock

    def backup(self, path: Path) -> BackupRecord:
        timestamp = self._clock()
        dest = backup_path_for(path, timestamp)

        try:
            with open(path, "rb") as src:
                try:
                    out = open(dest, "xb")
                except FileExistsError as e:
                    raise BackupError(path, f"backup path already exists: {dest}") from e
                try:
                    with out:
                        shutil.copyfileobj(src, out)
                except BaseException:
                    dest.unlink(missing_ok=True)
                    raise
        except BackupError:
            raise
        except OSError as e:
            raise BackupError(path, str(e)) from e

        logger.info("backed up %s to %s", path, dest)
        return BackupRecord(original_path=path, backup_path=dest, timestamp_millis=timestamp)
