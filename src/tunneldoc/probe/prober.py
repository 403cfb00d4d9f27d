"""Reachability probing for candidate (host, port) pairs."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

import requests

from tunneldoc.core.config import ProbeConfig
from tunneldoc.core.models import ProbeResult, ProbeTarget

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = ("localhost", "127.0.0.1", "0.0.0.0")


class PortProber:
    """Issues one bounded GET per (host, port) and classifies the outcome.

    Every outcome, including refusal, DNS failure and timeout, comes back as
    a :class:`ProbeResult`. Nothing raised by the HTTP layer reaches the
    caller and nothing is retried.
    """

    def __init__(
        self,
        hosts: Iterable[str] = DEFAULT_HOSTS,
        timeout_ms: int = 3000,
        max_workers: int = 8,
    ):
        self.hosts = list(hosts)
        self.timeout = timeout_ms / 1000
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_config(cls, config: ProbeConfig) -> PortProber:
        return cls(
            hosts=config.hosts,
            timeout_ms=config.timeout_ms,
            max_workers=config.max_workers,
        )

    def targets(self, ports: Iterable[int]) -> list[ProbeTarget]:
        """Expand ports into targets, port-major then host order."""
        return [ProbeTarget(host, port) for port in ports for host in self.hosts]

    def probe(self, target: ProbeTarget) -> ProbeResult:
        url = target.url
        try:
            with requests.get(
                url,
                timeout=self.timeout,
                stream=True,
                allow_redirects=False,
            ) as resp:
                logger.debug("probe %s -> %s", url, resp.status_code)
                return ProbeResult(
                    target=target,
                    reachable=True,
                    status_code=resp.status_code,
                    response_headers=dict(resp.headers),
                )
        except requests.Timeout:
            logger.debug("probe %s timed out after %.1fs", url, self.timeout)
            return ProbeResult(target=target, reachable=False, error_message="Timeout")
        except requests.RequestException as e:
            logger.debug("probe %s failed: %s", url, e)
            return ProbeResult(target=target, reachable=False, error_message=str(e))

    def probe_all(self, ports: Iterable[int]) -> list[ProbeResult]:
        """Run the reachability phase. Results follow the order of ``targets``."""
        targets = self.targets(ports)
        if not targets:
            return []
        workers = min(self.max_workers, len(targets))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.probe, targets))
