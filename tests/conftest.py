"""Shared fixtures: free loopback ports and live listeners."""
import socket
import threading
from contextlib import contextmanager

import pytest
from werkzeug.serving import make_server

from probe_server.access_log import AccessLog
from probe_server.config import PortBinding
from probe_server.serve import ListenerSet


def get_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@contextmanager
def serve_wsgi(app):
    srv = make_server("127.0.0.1", 0, app, threaded=True)
    t = threading.Thread(target=srv.serve_forever, daemon=True)
    t.start()
    try:
        yield srv.server_port
    finally:
        srv.shutdown()
        t.join()
        srv.server_close()


@pytest.fixture
def free_port():
    return get_free_port()


@pytest.fixture
def access_log(tmp_path):
    return AccessLog(str(tmp_path / "access_log.csv"))


@pytest.fixture
def listener(access_log):
    """One live ListenerSet on a loopback port answering 'hello'."""
    binding = PortBinding(get_free_port(), "hello")
    ls = ListenerSet([binding], access_log, host="127.0.0.1")
    ls.start()
    yield binding
    ls.shutdown()
