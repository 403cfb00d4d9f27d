"""Idempotent patch steps for app.json and package.json.

Each step receives the parsed document, checks whether the document is
already correct and mutates it only when it is not. A step returns the
change-log description when it changed something and None otherwise, so
running a step list over its own output yields no descriptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from tunneldoc.core.config import WILDCARD_HOST, RepairConfig
from tunneldoc.core.documents import child_object
from tunneldoc.core.errors import ConfigParseError

Document = dict[str, Any]
PatchStep = Callable[[Document, Path, RepairConfig], "str | None"]

TUNNEL_SCRIPT_NAME = "start:tunnel"
TUNNEL_SCRIPT = f"EXPO_DEVTOOLS_LISTEN_ADDRESS={WILDCARD_HOST} npx expo start --tunnel --host {WILDCARD_HOST}"
CLEAN_SCRIPT_NAME = "start:clean"
CLEAN_SCRIPT = "npx expo start --clear"


def _server(doc: Document, path: Path) -> Document:
    server = child_object(doc, "server", path, "server")
    if server is None:
        # ensure_server_object runs first; reaching here means it was skipped
        raise ConfigParseError(path, "server settings object is missing")
    return server


# ---------------------------------------------------------------------------
# app.json
# ---------------------------------------------------------------------------


def ensure_server_object(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    if child_object(doc, "server", path, "server") is not None:
        return None
    doc["server"] = {}
    return "Created server settings object"


def force_wildcard_host(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    server = _server(doc, path)
    if server.get("host") == WILDCARD_HOST:
        return None
    server["host"] = WILDCARD_HOST
    return f'Set server.host to "{WILDCARD_HOST}" for external access'


def ensure_default_port(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    server = _server(doc, path)
    if server.get("port"):
        return None
    server["port"] = settings.default_port
    return f"Set default server port to {settings.default_port}"


def remove_cors_restrictions(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    server = _server(doc, path)
    removed = False
    for holder in (server, doc):
        if "cors" in holder:
            del holder["cors"]
            removed = True
    if not removed:
        return None
    return "Removed restrictive CORS settings to use Expo defaults"


def disable_router_origin(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    expo = child_object(doc, "expo", path, "expo")
    extra = child_object(expo, "extra", path, "expo.extra") if expo is not None else None
    router = child_object(extra, "router", path, "expo.extra.router") if extra is not None else None
    if router is not None and router.get("origin") is False:
        return None

    if expo is None:
        expo = doc["expo"] = {}
    if extra is None:
        extra = expo["extra"] = {}
    if router is None:
        router = extra["router"] = {}
    router["origin"] = False
    return "Set router.origin to false for better compatibility"


APP_CONFIG_STEPS: list[PatchStep] = [
    ensure_server_object,
    force_wildcard_host,
    ensure_default_port,
    remove_cors_restrictions,
    disable_router_origin,
]


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def _ensure_script(doc: Document, path: Path, name: str, command: str) -> bool:
    scripts = child_object(doc, "scripts", path, "scripts")
    if scripts is not None and scripts.get(name):
        return False
    if scripts is None:
        scripts = doc["scripts"] = {}
    scripts[name] = command
    return True


def add_tunnel_script(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    if not _ensure_script(doc, path, TUNNEL_SCRIPT_NAME, TUNNEL_SCRIPT):
        return None
    return f"Added {TUNNEL_SCRIPT_NAME} script for external access"


def add_clean_script(doc: Document, path: Path, settings: RepairConfig) -> str | None:
    if not _ensure_script(doc, path, CLEAN_SCRIPT_NAME, CLEAN_SCRIPT):
        return None
    return f"Added {CLEAN_SCRIPT_NAME} script for cache clearing"


PACKAGE_CONFIG_STEPS: list[PatchStep] = [
    add_tunnel_script,
    add_clean_script,
]
