# config.py
# Loads the server config file (Port,Text rows, no header) and holds server settings.

import csv
import logging
import re
from dataclasses import dataclass

from probe_server.errors import FormatError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "servers.csv"
DEFAULT_ACCESS_LOG = "access_log.csv"
DEFAULT_REPORT_FILE = "report.csv"
DEFAULT_BIND = "0.0.0.0"

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PortBinding:
    port: int
    text: str


@dataclass(frozen=True)
class ServerConfig:
    config_file: str = DEFAULT_CONFIG_FILE
    bind: str = DEFAULT_BIND
    access_log: str = DEFAULT_ACCESS_LOG
    report_file: str = DEFAULT_REPORT_FILE


def parse_int(s: str) -> int:
    # plain ASCII digits with an optional sign; no spaces or underscores
    if not _INT_RE.fullmatch(s):
        raise ValueError(f"not an integer: {s!r}")
    return int(s)


def load_bindings(path: str) -> list[PortBinding]:
    # Only the port column is checked; duplicates and out-of-range ports pass.
    bindings = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row:
                continue
            line = reader.line_num
            if len(row) < 2:
                raise FormatError(path, line, "expected [Port, Text]")
            try:
                port = parse_int(row[0])
            except ValueError:
                raise FormatError(path, line, f"invalid port: {row[0]!r}") from None
            bindings.append(PortBinding(port, row[1]))

    logger.debug("loaded %d port bindings from %s", len(bindings), path)
    return bindings
