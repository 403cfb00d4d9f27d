"""CORS preflight validation against a discovered dev server."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

import requests

from tunneldoc.core.config import CorsConfig
from tunneldoc.core.models import CorsOutcome, CorsTrial

logger = logging.getLogger(__name__)


class CorsValidator:
    """Sends one OPTIONS preflight per origin and checks Access-Control-Allow-Origin.

    A trial passes when the header is ``*`` or exactly the request's
    ``Origin``. Allow-methods and allow-headers are not part of the verdict.
    """

    def __init__(
        self,
        timeout_ms: int = 5000,
        request_method: str = "GET",
        request_headers: str = "Content-Type",
        max_workers: int = 4,
    ):
        self.timeout = timeout_ms / 1000
        self.request_method = request_method
        self.request_headers = request_headers
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_config(cls, config: CorsConfig) -> CorsValidator:
        return cls(
            timeout_ms=config.timeout_ms,
            request_method=config.request_method,
            request_headers=config.request_headers,
        )

    def validate(self, server_url: str, origin: str) -> CorsOutcome:
        return self.run_trial(CorsTrial(origin=origin, server_url=server_url))

    def run_trial(self, trial: CorsTrial) -> CorsOutcome:
        url = trial.server_url.rstrip("/") + "/"
        headers = {
            "Origin": trial.origin,
            "Access-Control-Request-Method": self.request_method,
            "Access-Control-Request-Headers": self.request_headers,
        }
        try:
            resp = requests.options(
                url, headers=headers, timeout=self.timeout, allow_redirects=False
            )
        except requests.Timeout:
            logger.debug("preflight %s from %s timed out", url, trial.origin)
            return CorsOutcome(origin=trial.origin, allowed=False, message="Request timeout")
        except requests.RequestException as e:
            logger.debug("preflight %s from %s failed: %s", url, trial.origin, e)
            return CorsOutcome(
                origin=trial.origin, allowed=False, message=f"Request failed: {e}"
            )

        with resp:
            allow_origin = resp.headers.get("Access-Control-Allow-Origin")

        if allow_origin == "*" or allow_origin == trial.origin:
            return CorsOutcome(
                origin=trial.origin,
                allowed=True,
                allowed_origin_header=allow_origin,
                message=f"CORS allowed ({allow_origin})",
            )
        return CorsOutcome(
            origin=trial.origin,
            allowed=False,
            allowed_origin_header=allow_origin,
            message=f"CORS blocked (got: {allow_origin or 'none'})",
        )

    def validate_all(self, server_url: str, origins: Iterable[str]) -> list[CorsOutcome]:
        """Run every trial independently; outcomes keep the order of ``origins``."""
        trials = [CorsTrial(origin=o, server_url=server_url) for o in origins]
        if not trials:
            return []
        workers = min(self.max_workers, len(trials))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.run_trial, trials))
