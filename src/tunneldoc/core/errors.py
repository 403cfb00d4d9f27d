"""Exception types raised inside tunneldoc.

Per-file and per-target failures are caught where they happen and turned
into report entries; these exceptions only travel as far as that boundary.
"""

from __future__ import annotations

from pathlib import Path


class TunnelDocError(Exception):
    """Base class for all tunneldoc errors."""


class ConfigParseError(TunnelDocError):
    """A tracked configuration document is malformed or has the wrong shape."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path.name}: {reason}")


class BackupError(TunnelDocError):
    """A pre-write backup could not be created."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not back up {path}: {reason}")
