"""tunneldoc: tunnel reachability and CORS doctor for Expo dev servers."""

from tunneldoc._version import __version__
from tunneldoc.runner import run_diagnostics, run_repair

__all__ = [
    "__version__",
    "run_diagnostics",
    "run_repair",
]
