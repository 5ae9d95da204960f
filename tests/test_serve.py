import errno
import socket

import aiohttp
import pytest

from conftest import get_free_port
from probe_server.access_log import read_log
from probe_server.config import PortBinding
from probe_server.errors import BindError
from probe_server.serve import ListenerSet


@pytest.mark.asyncio
async def test_each_port_serves_its_own_text(access_log):
    bindings = [PortBinding(get_free_port(), "first"), PortBinding(get_free_port(), "second")]
    ls = ListenerSet(bindings, access_log, host="127.0.0.1")
    ls.start()
    try:
        assert ls.ports == [b.port for b in bindings]
        async with aiohttp.ClientSession() as s:
            for b in bindings:
                async with s.get(f"http://127.0.0.1:{b.port}/") as r:
                    assert r.status == 200
                    assert await r.text() == b.text
    finally:
        ls.shutdown()

    records = read_log(access_log.path)
    assert sorted(r.server_port for r in records) == sorted(b.port for b in bindings)
    for r in records:
        assert r.client_address == "127.0.0.1"
        assert int(r.client_port) > 0


def test_busy_port_aborts_the_whole_set(access_log):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        busy_port = busy.getsockname()[1]

        free = get_free_port()
        ls = ListenerSet(
            [PortBinding(free, "ok"), PortBinding(busy_port, "taken")],
            access_log,
            host="127.0.0.1",
        )
        with pytest.raises(BindError) as exc:
            ls.start()
        assert exc.value.port == busy_port
        assert ls.servers == []

    # the port bound before the failure was released
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        s.bind(("127.0.0.1", free))


@pytest.mark.parametrize("bad_port", [70000, -1])
def test_port_outside_valid_range_is_a_bind_error(access_log, bad_port):
    ls = ListenerSet(
        [PortBinding(get_free_port(), "ok"), PortBinding(bad_port, "nope")],
        access_log,
        host="127.0.0.1",
    )
    with pytest.raises(BindError) as exc:
        ls.start()
    assert exc.value.port == bad_port
    assert ls.servers == []


def test_bind_error_keeps_the_socket_error(access_log):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        busy_port = busy.getsockname()[1]

        ls = ListenerSet([PortBinding(busy_port, "taken")], access_log, host="127.0.0.1")
        with pytest.raises(BindError) as exc:
            ls.start()
    assert isinstance(exc.value.cause, OSError)
    assert exc.value.cause.errno == errno.EADDRINUSE
