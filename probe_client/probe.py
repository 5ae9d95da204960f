# probe.py
# One HTTP GET per target, at most `concurrency` in flight (asyncio + aiohttp).

import asyncio
import ipaddress
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterable

import aiohttp

from probe_client.config import Target

logger = logging.getLogger(__name__)


class Status(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ProbeResult:
    address: str
    port: int
    status: Status


@dataclass(frozen=True)
class ProbeSummary:
    total: int
    open: int
    closed: int


ProbeFunc = Callable[[aiohttp.ClientSession, Target, float], Awaitable[ProbeResult]]


def target_url(target: Target) -> str:
    host = target.address
    try:
        if ipaddress.ip_address(host).version == 6:
            host = f"[{host}]"
    except ValueError:
        pass
    return f"http://{host}:{target.port}/"


async def probe_target(session: aiohttp.ClientSession, target: Target, timeout: float) -> ProbeResult:
    """
    Open means the GET completed with status exactly 200.
    Refused, timed out, non-200 and malformed responses all count as closed.
    """
    url = target_url(target)
    status = Status.CLOSED
    try:
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout), allow_redirects=False) as r:
            if r.status == 200:
                status = Status.OPEN
            else:
                logger.debug("%s answered HTTP %d", url, r.status)
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
        logger.debug("%s unreachable: %r", url, e)
    return ProbeResult(target.address, target.port, status)


async def probe_all(
    targets: Iterable[Target],
    timeout: float,
    concurrency: int,
    probe: ProbeFunc = probe_target,
) -> list[ProbeResult]:
    """
    Probes every target and returns one result per target in completion order.
    Duplicated targets are probed (and reported) once per occurrence.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    sem = asyncio.Semaphore(concurrency)
    results: list[ProbeResult] = []

    connector = aiohttp.TCPConnector(limit=concurrency, force_close=True)
    async with aiohttp.ClientSession(connector=connector) as session:

        async def gated(target: Target) -> ProbeResult:
            async with sem:
                return await probe(session, target, timeout)

        tasks = [asyncio.ensure_future(gated(t)) for t in targets]
        for fut in asyncio.as_completed(tasks):
            results.append(await fut)

    return results


def run_probes(targets: Iterable[Target], timeout: float, concurrency: int) -> list[ProbeResult]:
    return asyncio.run(probe_all(targets, timeout, concurrency))


def summarize(results: Iterable[ProbeResult]) -> ProbeSummary:
    total = open_count = 0
    for r in results:
        total += 1
        if r.status is Status.OPEN:
            open_count += 1
    return ProbeSummary(total=total, open=open_count, closed=total - open_count)
