"""Companion launch script generation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from tunneldoc.core.config import WILDCARD_HOST

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o755

LAUNCH_SCRIPT = f"""\
#!/bin/bash

# Expo dev server startup script with tunnel and external access.
# Generated by tunneldoc; rerunning `tunneldoc repair` overwrites this file.

echo "Starting Expo dev server with tunnel and external access..."

export EXPO_DEVTOOLS_LISTEN_ADDRESS={WILDCARD_HOST}
export EXPO_USE_FAST_RESOLVER=1

echo "Clearing Metro cache..."
npx expo start --clear

echo "Starting with tunnel for external access..."
npx expo start --tunnel --host {WILDCARD_HOST}
"""


class ScriptGenerator:
    """Writes the launch script. Derived output: no backup, always rewritten."""

    def __init__(self, script_path: Path):
        self.script_path = script_path

    def generate(self) -> Path:
        self.script_path.parent.mkdir(parents=True, exist_ok=True)
        self.script_path.write_text(LAUNCH_SCRIPT, encoding="utf-8")
        if os.name != "nt":
            self.script_path.chmod(SCRIPT_MODE)
        logger.info("wrote launch script %s", self.script_path)
        return self.script_path
