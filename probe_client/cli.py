# cli.py
# Command line entry point for the port checker.
#   Usage (example):
#     portprobe-client -s servers.csv -o result.csv -t 2 -c 5

import argparse
import logging
import sys

from probe_client.config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SERVERS_FILE,
    DEFAULT_TIMEOUT,
    ClientConfig,
    load_targets,
)
from probe_client.errors import ConfigError
from probe_client.probe import run_probes, summarize
from probe_client.results import write_results

logger = logging.getLogger("probe_client")

CSV_HELP = """\
Expected CSV Format for servers and ports file:
  servers.csv:
    IP,Port
    127.0.0.1,8080
    192.168.1.10,8081"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="portprobe-client",
        description="Check which IP:port pairs answer HTTP GET / with 200",
        epilog=CSV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--servers", "-s", default=DEFAULT_SERVERS_FILE,
                    help=f"Path to servers and ports CSV file (default: {DEFAULT_SERVERS_FILE})")
    ap.add_argument("--output", "-o", default=DEFAULT_OUTPUT_FILE,
                    help=f"Path to output result CSV file (default: {DEFAULT_OUTPUT_FILE})")
    ap.add_argument("--timeout", "-t", type=int, default=DEFAULT_TIMEOUT,
                    help=f"Timeout for each request in seconds (default: {DEFAULT_TIMEOUT})")
    ap.add_argument("--concurrency", "-c", type=int, default=DEFAULT_CONCURRENCY,
                    help=f"Number of concurrent requests (default: {DEFAULT_CONCURRENCY})")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(cfg: ClientConfig) -> int:
    if cfg.concurrency < 1:
        logger.error("--concurrency must be >= 1 (got %d)", cfg.concurrency)
        return 1

    try:
        targets = load_targets(cfg.servers_file)
    except ConfigError as e:
        logger.error("Servers file validation failed: %s", e)
        return 1
    except OSError as e:
        logger.error("Could not read servers file %s: %s", cfg.servers_file, e)
        return 1

    print(f"Starting port test with {cfg.timeout} second timeout and {cfg.concurrency} concurrent requests")
    results = run_probes(targets, cfg.timeout, cfg.concurrency)

    try:
        write_results(results, cfg.output_file)
    except OSError as e:
        logger.error("Error writing results to %s: %s", cfg.output_file, e)
        return 1

    summary = summarize(results)
    print(f"Total Tests: {summary.total}, Success: {summary.open}, Failure: {summary.closed}")
    return 0


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    cfg = ClientConfig(
        servers_file=args.servers,
        output_file=args.output,
        timeout=args.timeout,
        concurrency=args.concurrency,
    )
    return run(cfg)


if __name__ == "__main__":
    raise SystemExit(main())
