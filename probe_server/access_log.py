# access_log.py
# Append-only CSV log of incoming requests: Timestamp,ClientIP,ClientPort,ServerPort.
#
# Every append opens, writes one row and closes the file. There is no lock;
# concurrent writers rely on append-mode writes not interleaving a single row.

import csv
import datetime
import logging
from dataclasses import dataclass

from probe_server.config import parse_int

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class AccessRecord:
    timestamp: datetime.datetime
    client_address: str
    client_port: str
    server_port: int

    def to_row(self) -> list[str]:
        return [
            self.timestamp.strftime(TIMESTAMP_FORMAT),
            self.client_address,
            self.client_port,
            str(self.server_port),
        ]


class AccessLog:
    def __init__(self, path: str):
        self.path = path

    def append(self, record: AccessRecord) -> bool:
        """Write one row. Failures are logged, never raised."""
        try:
            with open(self.path, "a", newline="", encoding="utf-8") as f:
                csv.writer(f).writerow(record.to_row())
        except OSError as e:
            logger.error("Error writing access log %s: %s", self.path, e)
            return False
        return True

    def record_access(self, client_address: str, client_port: str, server_port: int) -> bool:
        record = AccessRecord(
            timestamp=datetime.datetime.now().replace(microsecond=0),
            client_address=client_address,
            client_port=client_port,
            server_port=server_port,
        )
        return self.append(record)


def _parse_timestamp(s: str) -> datetime.datetime:
    try:
        return datetime.datetime.strptime(s, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.datetime.min


def _parse_port(s: str) -> int:
    try:
        return parse_int(s)
    except ValueError:
        return 0


def parse_row(row: list[str]) -> AccessRecord:
    # Bad or missing fields fall back to zero values instead of failing the row.
    row = list(row) + [""] * (4 - len(row))
    return AccessRecord(
        timestamp=_parse_timestamp(row[0]),
        client_address=row[1],
        client_port=row[2],
        server_port=_parse_port(row[3]),
    )


def read_log(path: str) -> list[AccessRecord]:
    with open(path, newline="", encoding="utf-8") as f:
        return [parse_row(row) for row in csv.reader(f) if row]
