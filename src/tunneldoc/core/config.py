"""Configuration management for tunneldoc (tunneldoc.toml parsing + defaults)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


CONFIG_FILENAME = "tunneldoc.toml"

WILDCARD_HOST = "0.0.0.0"


@dataclass
class GeneralConfig:
    log_level: str = "WARNING"


@dataclass
class ProbeConfig:
    ports: list[int] = field(default_factory=lambda: [8081, 19000, 19006, 19001, 19002])
    hosts: list[str] = field(default_factory=lambda: ["localhost", "127.0.0.1", "0.0.0.0"])
    timeout_ms: int = 3000
    max_workers: int = 8


@dataclass
class CorsConfig:
    origins: list[str] = field(
        default_factory=lambda: [
            "https://app.tempo.build",
            "http://localhost:3000",
            "https://localhost:3000",
            "http://127.0.0.1:3000",
            "https://127.0.0.1:3000",
        ]
    )
    timeout_ms: int = 5000
    request_method: str = "GET"
    request_headers: str = "Content-Type"


@dataclass
class RepairConfig:
    default_port: int = 8081
    app_config: str = "app.json"
    package_config: str = "package.json"
    metro_config: str = "metro.config.js"
    script_path: str = "scripts/start-with-tunnel.sh"


@dataclass
class TunnelDocConfig:
    """Complete tunneldoc configuration."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    cors: CorsConfig = field(default_factory=CorsConfig)
    repair: RepairConfig = field(default_factory=RepairConfig)


def load_config(project_path: Path | None = None) -> TunnelDocConfig:
    """Load configuration from tunneldoc.toml if present, otherwise return defaults.

    A malformed file raises ``tomllib.TOMLDecodeError``; unknown keys are ignored.
    """
    config = TunnelDocConfig()

    if project_path is None:
        project_path = Path.cwd()

    config_file = project_path / CONFIG_FILENAME
    if not config_file.exists():
        return config

    with open(config_file, "rb") as f:
        data = tomllib.load(f)

    if "general" in data:
        gen = data["general"]
        if "log_level" in gen:
            config.general.log_level = str(gen["log_level"]).upper()

    if "probe" in data:
        p = data["probe"]
        if "ports" in p:
            config.probe.ports = [int(port) for port in p["ports"]]
        for attr in ("hosts", "timeout_ms", "max_workers"):
            if attr in p:
                setattr(config.probe, attr, p[attr])

    if "cors" in data:
        c = data["cors"]
        for attr in ("origins", "timeout_ms", "request_method", "request_headers"):
            if attr in c:
                setattr(config.cors, attr, c[attr])

    if "repair" in data:
        r = data["repair"]
        for attr in ("default_port", "app_config", "package_config", "metro_config", "script_path"):
            if attr in r:
                setattr(config.repair, attr, r[attr])

    return config
