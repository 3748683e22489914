from __future__ import annotations

import logging
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Tuple, cast

from deltabeat.common.logging import get_logger
from deltabeat.common.settings import StatusConfig
from deltabeat.monitoring.state import ExposedState


class _StatusHTTPServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(
        self,
        server_address: Tuple[str, int],
        handler_class: type[BaseHTTPRequestHandler],
        *,
        state: ExposedState,
        logger: logging.Logger,
    ) -> None:
        super().__init__(server_address, handler_class)
        self.state = state
        self.logger = logger


class _StatusRequestHandler(BaseHTTPRequestHandler):
    """Serve the latest status block on every path."""

    server_version = "deltabeat-status/1.0"

    def do_GET(self) -> None:
        self._respond(include_body=True)

    def do_HEAD(self) -> None:
        self._respond(include_body=False)

    def send_error(
        self, code: int, message: Optional[str] = None, explain: Optional[str] = None
    ) -> None:
        # Methods without a do_* handler land here as 501.
        if code == HTTPStatus.NOT_IMPLEMENTED and self.command not in ("GET", "HEAD"):
            self._reject()
            return
        super().send_error(code, message, explain)

    def _respond(self, *, include_body: bool) -> None:
        server = cast(_StatusHTTPServer, self.server)
        body = server.state.get().encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if include_body:
            self.wfile.write(body)

    def _reject(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        if length > 0:
            self.rfile.read(length)
        self.send_response(405)
        self.send_header("Allow", "GET, HEAD")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format: str, *args) -> None:
        server = cast(_StatusHTTPServer, self.server)
        server.logger.debug(
            "status_request",
            extra={"client": self.client_address[0], "request": format % args},
        )


class StatusServer:
    def __init__(
        self,
        state: ExposedState,
        config: Optional[StatusConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.state = state
        self.config = config or StatusConfig()
        self.logger = logger or get_logger("status")
        self._httpd: Optional[_StatusHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> Tuple[str, int]:
        if self._httpd is None:
            raise RuntimeError("Status server is not running")
        host, port = self._httpd.server_address[:2]
        return str(host), int(port)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._httpd is not None:
            raise RuntimeError("Status server already started")
        self._httpd = _StatusHTTPServer(
            (self.config.host, self.config.port),
            _StatusRequestHandler,
            state=self.state,
            logger=self.logger,
        )
        self._thread = threading.Thread(
            target=self._httpd.serve_forever, name="status-server", daemon=True
        )
        self._thread.start()
        host, port = self.address
        self.logger.info("status_server_started", extra={"host": host, "port": port})

    def stop(self) -> None:
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
        self._httpd = None
        self._thread = None
        self.logger.info("status_server_stopped")
