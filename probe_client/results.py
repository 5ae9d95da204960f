# results.py
# Result file: IP,Port,Status header followed by one row per probe.

import csv
from typing import Iterable

from probe_client.probe import ProbeResult, Status

RESULT_HEADER = ["IP", "Port", "Status"]


def write_results(results: Iterable[ProbeResult], path: str) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(RESULT_HEADER)
        for r in results:
            w.writerow([r.address, r.port, r.status.value])


def read_results(path: str) -> list[ProbeResult]:
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        return [ProbeResult(row[0], int(row[1]), Status(row[2])) for row in reader if row]
