"""Find the first reachable local dev server in priority order."""

from __future__ import annotations

import logging
from typing import Iterable

from tunneldoc.core.models import ProbeTarget
from tunneldoc.probe.prober import PortProber

logger = logging.getLogger(__name__)


class ActiveServerLocator:
    """Walks the port priority list and stops at the first reachable endpoint."""

    def __init__(self, prober: PortProber, ports: Iterable[int]):
        self.prober = prober
        self.ports = list(ports)

    def _hosts(self) -> list[str]:
        # localhost is always tried first for each port
        hosts = [h for h in self.prober.hosts if h != "localhost"]
        return ["localhost", *hosts]

    def locate(self) -> str | None:
        """Return the URL of the first reachable server, or None if none answer."""
        for port in self.ports:
            for host in self._hosts():
                result = self.prober.probe(ProbeTarget(host, port))
                if result.reachable:
                    logger.debug("active server found at %s", result.target.url)
                    return result.target.url
        logger.debug("no active server on ports %s", self.ports)
        return None
