# config.py
# Loads the servers file (IP,Port rows, no header) and holds the client settings.

import csv
import ipaddress
import logging
import re
from dataclasses import dataclass

from probe_client.errors import FormatError

logger = logging.getLogger(__name__)

DEFAULT_SERVERS_FILE = "servers.csv"
DEFAULT_OUTPUT_FILE = "result.csv"
DEFAULT_TIMEOUT = 2
DEFAULT_CONCURRENCY = 5

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Target:
    address: str
    port: int


@dataclass(frozen=True)
class ClientConfig:
    servers_file: str = DEFAULT_SERVERS_FILE
    output_file: str = DEFAULT_OUTPUT_FILE
    timeout: int = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY


def parse_int(s: str) -> int:
    # plain ASCII digits with an optional sign; no spaces or underscores
    if not _INT_RE.fullmatch(s):
        raise ValueError(f"not an integer: {s!r}")
    return int(s)


def is_ip_literal(s: str) -> bool:
    # zoned IPv6 (fe80::1%eth0) is not a literal address
    if "%" in s:
        return False
    try:
        ipaddress.ip_address(s)
    except ValueError:
        return False
    return True


def load_targets(path: str) -> list[Target]:
    """
    Reads `IP,Port` rows in file order.
    Raises FormatError (with the 1-based line) for a bad row and OSError
    when the file can't be read.
    """
    targets = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row:
                continue
            line = reader.line_num
            if len(row) < 2:
                raise FormatError(path, line, "expected [IP, Port]")
            address, port_s = row[0], row[1]
            if not is_ip_literal(address):
                raise FormatError(path, line, f"invalid IP address: {address}")
            try:
                port = parse_int(port_s)
            except ValueError:
                raise FormatError(path, line, f"invalid port: {port_s!r}") from None
            targets.append(Target(address, port))

    logger.debug("loaded %d targets from %s", len(targets), path)
    return targets
