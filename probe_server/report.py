# report.py
# Groups the access log by client (IP, port) and writes one summary row per client.

import csv
import datetime
import logging
from dataclasses import dataclass, field
from typing import Iterable

from probe_server.access_log import AccessRecord, read_log

logger = logging.getLogger(__name__)

REPORT_HEADER = ["Client IP", "Client Port", "Last Access", "Tries", "Server Ports"]


@dataclass
class ClientSummary:
    client_address: str
    client_port: str
    last_access: datetime.datetime
    tries: int = 0
    server_ports: set[int] = field(default_factory=set)


def build_report(records: Iterable[AccessRecord]) -> list[ClientSummary]:
    """
    Single pass over the log. last_access is the largest timestamp seen for
    the client, so rows written out of order still report the right value.
    Order of the returned summaries is not meaningful.
    """
    by_client: dict[tuple[str, str], ClientSummary] = {}
    for rec in records:
        key = (rec.client_address, rec.client_port)
        entry = by_client.get(key)
        if entry is None:
            entry = ClientSummary(rec.client_address, rec.client_port, rec.timestamp)
            by_client[key] = entry
        entry.tries += 1
        entry.server_ports.add(rec.server_port)
        if rec.timestamp > entry.last_access:
            entry.last_access = rec.timestamp
    return list(by_client.values())


def format_ports(ports: Iterable[int]) -> str:
    return "[" + " ".join(str(p) for p in sorted(ports)) + "]"


def format_time(ts: datetime.datetime) -> str:
    # strftime doesn't zero-pad years below 1000 (datetime.min marks an unparsable timestamp)
    return f"{ts.year:04d}-{ts:%m-%d %H:%M:%S}"


def write_report(summaries: Iterable[ClientSummary], path: str) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(REPORT_HEADER)
        for s in summaries:
            w.writerow([
                s.client_address,
                s.client_port,
                format_time(s.last_access),
                s.tries,
                format_ports(s.server_ports),
            ])


def generate_report(log_path: str, report_path: str) -> list[ClientSummary]:
    records = read_log(log_path)
    summaries = build_report(records)
    write_report(summaries, report_path)
    logger.info("%d log records -> %d clients", len(records), len(summaries))
    print(f"Report saved to {report_path}")
    return summaries
