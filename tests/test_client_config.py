import pytest

from probe_client.config import Target, load_targets
from probe_client.errors import ConfigError, FormatError


def write(tmp_path, text):
    p = tmp_path / "servers.csv"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_load_targets_keeps_file_order(tmp_path):
    path = write(tmp_path, "127.0.0.1,8080\n192.168.1.10,8081\n::1,9000\n127.0.0.1,8080\n")
    assert load_targets(path) == [
        Target("127.0.0.1", 8080),
        Target("192.168.1.10", 8081),
        Target("::1", 9000),
        Target("127.0.0.1", 8080),
    ]


def test_extra_columns_and_blank_lines_are_ignored(tmp_path):
    path = write(tmp_path, "10.0.0.1,80,web\n\n10.0.0.2,81\n")
    assert load_targets(path) == [Target("10.0.0.1", 80), Target("10.0.0.2", 81)]


@pytest.mark.parametrize(
    "text, line, fragment",
    [
        ("127.0.0.1,8080\nnot-an-ip,80\n", 2, "invalid IP address"),
        ("127.0.0.1,http\n", 1, "invalid port"),
        ("127.0.0.1,8080\n10.0.0.1,8081\n10.0.0.2\n", 3, "expected [IP, Port]"),
        ("example.com,80\n", 1, "invalid IP address"),
        ("fe80::1%eth0,80\n", 1, "invalid IP address"),
        ("127.0.0.1, 80\n", 1, "invalid port"),
        ("127.0.0.1,8_080\n", 1, "invalid port"),
        ("127.0.0.1,\u0668\u0660\n", 1, "invalid port"),
    ],
)
def test_bad_rows_cite_line_number(tmp_path, text, line, fragment):
    path = write(tmp_path, text)
    with pytest.raises(FormatError) as exc:
        load_targets(path)
    assert exc.value.line == line
    assert f"line {line}" in str(exc.value)
    assert fragment in str(exc.value)
    assert isinstance(exc.value, ConfigError)


def test_missing_file_is_os_error(tmp_path):
    with pytest.raises(OSError):
        load_targets(str(tmp_path / "nope.csv"))
