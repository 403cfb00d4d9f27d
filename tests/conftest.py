"""Shared fixtures: throwaway local HTTP servers and free ports."""

from __future__ import annotations

import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Iterator

import pytest


def _make_handler(allow_origin: str | None, seen: list[dict[str, str]]):
    class Handler(BaseHTTPRequestHandler):
        def log_message(self, format, *args):  # noqa: A002
            pass

        def _cors_headers(self) -> None:
            if allow_origin is not None:
                self.send_header("Access-Control-Allow-Origin", allow_origin)

        def do_GET(self) -> None:  # noqa: N802
            body = b"<html>metro</html>"
            self.send_response(200)
            self.send_header("Content-Type", "text/html")
            self.send_header("Content-Length", str(len(body)))
            self._cors_headers()
            self.end_headers()
            self.wfile.write(body)

        def do_OPTIONS(self) -> None:  # noqa: N802
            seen.append(dict(self.headers.items()))
            self.send_response(204)
            self._cors_headers()
            self.send_header("Access-Control-Allow-Methods", "GET, POST")
            self.send_header("Content-Length", "0")
            self.end_headers()

    return Handler


class LocalServer:
    def __init__(self, server: ThreadingHTTPServer, preflights: list[dict[str, str]]):
        self.server = server
        self.preflights = preflights

    @property
    def port(self) -> int:
        return self.server.server_address[1]

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}"


@pytest.fixture
def local_server() -> Iterator[Callable[..., LocalServer]]:
    """Factory: ``local_server(allow_origin="*")`` starts a server on 127.0.0.1."""
    started: list[tuple[ThreadingHTTPServer, threading.Thread]] = []

    def start(allow_origin: str | None = "*") -> LocalServer:
        preflights: list[dict[str, str]] = []
        server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(allow_origin, preflights))
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        started.append((server, thread))
        return LocalServer(server, preflights)

    yield start

    for server, thread in started:
        server.shutdown()
        server.server_close()
        thread.join(timeout=2.0)


@pytest.fixture
def closed_port() -> int:
    """A port on 127.0.0.1 that nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
