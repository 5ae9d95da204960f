# cli.py
# Command line entry point: serve the configured ports, or build the access report.
#   Usage (examples):
#     portprobe-server --start -c servers.csv
#     portprobe-server --report

import argparse
import logging
import sys

from probe_server.access_log import AccessLog
from probe_server.config import (
    DEFAULT_ACCESS_LOG,
    DEFAULT_BIND,
    DEFAULT_CONFIG_FILE,
    DEFAULT_REPORT_FILE,
    ServerConfig,
    load_bindings,
)
from probe_server.errors import BindError, ConfigError
from probe_server.report import generate_report
from probe_server.serve import ListenerSet

logger = logging.getLogger("probe_server")

CSV_HELP = """\
Expected CSV Format for --config file:
  servers.csv:
    Port,Text
    8080,Hello from port 8080
    8081,Welcome to port 8081"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="portprobe-server",
        description="Serve a fixed text on each configured port and report who connected",
        epilog=CSV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--start", "-s", action="store_true",
                      help="Start the server with the specified configuration")
    mode.add_argument("--report", "-r", action="store_true",
                      help="Generate a connection report based on access logs")
    ap.add_argument("--config", "-c", default=DEFAULT_CONFIG_FILE,
                    help=f"Path to server configuration CSV file (default: {DEFAULT_CONFIG_FILE})")
    ap.add_argument("--bind", default=DEFAULT_BIND, help=f"Listen address (default: {DEFAULT_BIND})")
    ap.add_argument("--access-log", default=DEFAULT_ACCESS_LOG,
                    help=f"Access log CSV file (default: {DEFAULT_ACCESS_LOG})")
    ap.add_argument("--report-file", default=DEFAULT_REPORT_FILE,
                    help=f"Report CSV file (default: {DEFAULT_REPORT_FILE})")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def start(cfg: ServerConfig) -> int:
    try:
        bindings = load_bindings(cfg.config_file)
    except ConfigError as e:
        logger.error("Configuration file validation failed: %s", e)
        return 1
    except OSError as e:
        logger.error("Error reading config file %s: %s", cfg.config_file, e)
        return 1

    listeners = ListenerSet(bindings, AccessLog(cfg.access_log), host=cfg.bind)
    try:
        listeners.start()
    except BindError as e:
        logger.error("%s", e)
        return 1

    try:
        listeners.wait()
    except KeyboardInterrupt:
        print("\n[*] Shutting down ...")
        listeners.shutdown()
    return 0


def report(cfg: ServerConfig) -> int:
    try:
        generate_report(cfg.access_log, cfg.report_file)
    except OSError as e:
        logger.error("Error generating report: %s", e)
        return 1
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
    cfg = ServerConfig(
        config_file=args.config,
        bind=args.bind,
        access_log=args.access_log,
        report_file=args.report_file,
    )
    if args.start:
        return start(cfg)
    if args.report:
        return report(cfg)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
