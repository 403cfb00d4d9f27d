"""Configuration checks: all built-in read-only checks."""

from tunneldoc.scanner.checks.base import ConfigCheck
from tunneldoc.scanner.checks.app_config import CFG001AppServerHost
from tunneldoc.scanner.checks.metro import CFG002MetroServerOverride
from tunneldoc.scanner.checks.package_scripts import CFG003TunnelStartScript

ALL_CHECKS: list[type[ConfigCheck]] = [
    CFG001AppServerHost,
    CFG002MetroServerOverride,
    CFG003TunnelStartScript,
]

__all__ = [
    "ALL_CHECKS",
    "ConfigCheck",
    "CFG001AppServerHost",
    "CFG002MetroServerOverride",
    "CFG003TunnelStartScript",
]
