# serve.py
# Runs one threaded werkzeug server per configured port.

import logging
import threading
from typing import Iterable

from werkzeug.serving import BaseWSGIServer, make_server

from probe_server.access_log import AccessLog
from probe_server.app import create_app
from probe_server.config import DEFAULT_BIND, PortBinding
from probe_server.errors import BindError

logger = logging.getLogger(__name__)

MAX_PORT = 65535


class ListenerSet:
    """
    All ports are bound before any of them starts serving, so a single
    bind failure aborts the whole set (BindError) and nothing is left listening.
    """

    def __init__(self, bindings: Iterable[PortBinding], access_log: AccessLog, host: str = DEFAULT_BIND):
        self.bindings = list(bindings)
        self.access_log = access_log
        self.host = host
        self.servers: list[BaseWSGIServer] = []
        self.threads: list[threading.Thread] = []

    def start(self) -> None:
        for b in self.bindings:
            # getaddrinfo wraps ports above 65535 instead of failing
            if not 0 <= b.port <= MAX_PORT:
                self._close_all()
                raise BindError(b.port, OSError(f"port must be 0-{MAX_PORT}"))
            app = create_app(b, self.access_log)
            try:
                srv = make_server(self.host, b.port, app, threaded=True)
            except (OSError, OverflowError) as e:
                self._close_all()
                raise BindError(b.port, e) from e
            # werkzeug reports bind failures with sys.exit(1) from inside its except block
            except SystemExit as e:
                self._close_all()
                cause = e.__context__
                if not isinstance(cause, OSError):
                    cause = OSError(f"cannot listen on {self.host}:{b.port}")
                raise BindError(b.port, cause) from e
            self.servers.append(srv)

        for b, srv in zip(self.bindings, self.servers):
            print(f"Starting server on port {b.port}")
            t = threading.Thread(target=srv.serve_forever, name=f"listener-{b.port}", daemon=True)
            t.start()
            self.threads.append(t)
        logger.info("listening on %d port(s)", len(self.servers))

    def wait(self) -> None:
        for t in self.threads:
            t.join()

    def shutdown(self) -> None:
        for srv in self.servers:
            srv.shutdown()
        self.wait()
        self._close_all()

    def _close_all(self) -> None:
        for srv in self.servers:
            srv.server_close()
        self.servers = []
        self.threads = []

    @property
    def ports(self) -> list[int]:
        return [srv.server_port for srv in self.servers]
