"""Command line entry point.

Usage:
    check_influxdb_query -H web01 -b telegraf -o ops -m cpu -f usage_system \\
        -T cpu=cpu-total -p 5m -a mean -w 80 -c 90 --token $INFLUX_TOKEN
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .check import run_check
from .client import DEFAULT_URL
from .config import PluginConfig, parse_tags
from .exceptions import ConfigurationError, PluginError
from .models import PluginResult, Status
from .thresholds import build_label

logger = logging.getLogger(__name__)

PROG = "check_influxdb_query"


class PluginArgumentParser(argparse.ArgumentParser):
    """Argument errors must exit UNKNOWN (3), not argparse's default 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(int(Status.UNKNOWN), f"{PROG.upper()} UNKNOWN: {message}\n")


def build_parser() -> PluginArgumentParser:
    parser = PluginArgumentParser(
        prog=PROG,
        description="Query InfluxDB with Flux and check the result against thresholds.",
    )
    # reserved plugin arguments
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s version {__version__}",
                        help="Prints the version of this script.")
    parser.add_argument("-?", "--usage", action="store_true", help="Prints a short usage message.")
    parser.add_argument("-t", "--timeout", type=int, help="Specify script timeout in seconds.")
    parser.add_argument("-H", "--host", help="Specify the host.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Set output verbosity.")
    parser.add_argument("-w", "--warning", type=float, help="Set warning threshold.")
    parser.add_argument("-c", "--critical", type=float, help="Set critical threshold.")

    parser.add_argument("--url", help=f"Set the InfluxDB URL, default: {DEFAULT_URL}")
    parser.add_argument("-b", "-d", "--bucket", "--database", dest="bucket",
                        help="Set the InfluxDB database/bucket.")
    parser.add_argument("-o", "--org", "--organization", dest="org", help="Set the organization.")
    parser.add_argument("-m", "--measurement", help="Specify the measurement.")
    parser.add_argument("-f", "--field", action="append", help="Specify the field. Can be provided multiple times.")
    parser.add_argument("--fieldcon", help="Specify by which function the fields are connected, e.g. 'or'.")
    parser.add_argument("-T", "--tag", action="append", metavar="KEY=VALUE",
                        help="Specify additional tags as key=value pairs. Can be provided multiple times.")
    parser.add_argument("-p", "--period", help="The time period over which the data is checked.")
    parser.add_argument("-a", "--aggregate", help="The aggregate function. The aggregate time is the same as period.")
    parser.add_argument("--thresfun", help="Threshold function how separate values are compared against the thresholds.")
    parser.add_argument("--diff", action="store_true",
                        help="Calculate difference before processing, useful for counter values like diskio.")
    parser.add_argument("--token", help="InfluxDB API token.")
    parser.add_argument("--bytes", action="store_true", help="Format output as human readable byte value.")
    parser.add_argument("--debug", action="store_true", help="Enables debug output to STDERR.")
    parser.add_argument("--nofill", action="store_true", help="Disable filling null values with 0.")
    parser.add_argument("--no-unknown-when-empty", action="store_true",
                        help="When no data is returned the status is set to ok.")
    return parser


def configure_logging(verbose: int = 0, debug: bool = False) -> None:
    level = logging.WARNING
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _unknown(message: str, label: str = PROG.upper()) -> PluginResult:
    return PluginResult(Status.UNKNOWN, label, message)


def label_from_args(args: argparse.Namespace) -> str:
    """Service label from raw options, or the program name if it cannot be built."""
    fields = [f for f in (args.field or []) if f]
    if not args.measurement or not fields:
        return PROG.upper()
    try:
        tags = parse_tags(args.tag)
    except ConfigurationError:
        tags = {}
    return build_label(args.measurement, fields, tags)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.usage:
        parser.print_usage(sys.stdout)
        return 0

    configure_logging(args.verbose or 0, args.debug)
    try:
        config = PluginConfig.from_args(args)
        result = run_check(config)
    except PluginError as exc:
        result = _unknown(str(exc), label_from_args(args))
    except Exception as exc:
        logger.exception("Unexpected error")
        result = _unknown(f"Unexpected error: {exc}", label_from_args(args))

    print(result.line)
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
