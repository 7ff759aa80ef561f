from typing import List, Optional
import argparse
import asyncio
import json
import logging

logger = logging.getLogger(__name__)

from selfie.records.app.cli import configure_logging
from selfie.records.resolve.batch import (
    DEFAULT_NAMESERVER,
    DEFAULT_RECORDS,
    RecordsResolver,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resolve", description="Resolve identity records over DNS"
    )
    parser.add_argument(
        "identifier", help="Domain (example.com) or email-shaped identifier."
    )
    parser.add_argument(
        "--key",
        dest="keys",
        action="append",
        help=f"Record key to resolve, may be repeated. Default: {', '.join(DEFAULT_RECORDS)}.",
    )
    parser.add_argument(
        "--nameserver",
        default=None,
        help=f"IPv4 nameserver to query. Default: {DEFAULT_NAMESERVER}.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Overall deadline in seconds for resolving all keys.",
    )
    parser.add_argument("--debug", action="store_true", help="Log every lookup.")
    return parser


async def realMain(argv: Optional[List[str]] = None) -> None:
    args = vars(build_parser().parse_args(argv))

    configure_logging(args.get("debug", False))

    resolver = RecordsResolver(debug=args.get("debug", False))
    records = await resolver.get_records(
        args["identifier"],
        args.get("keys"),
        args.get("nameserver"),
        args.get("timeout"),
    )
    print(json.dumps(records, indent=2, sort_keys=True))


def main() -> None:
    asyncio.run(realMain())


if __name__ == "__main__":
    main()
