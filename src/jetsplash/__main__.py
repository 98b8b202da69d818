"""Command-line entry point.

Examples:
- python -m jetsplash --count 5
- python -m jetsplash --json -v
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING

from jetsplash.app import open_repository
from jetsplash.config import Config
from jetsplash.errors import ConfigurationError
from jetsplash.network_error import error_description

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jetsplash", description="Fetch random photos from Unsplash."
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of concurrent requests (default: Config.parallel_requests).",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print photos as JSON lines."
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity."
    )
    return parser


async def run_cli(
    args: argparse.Namespace,
    config: Config,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Fetch the requested photos and print them; return the exit code."""
    count = args.count if args.count is not None else config.parallel_requests
    if count < 1:
        print("error: --count must be >= 1", file=sys.stderr)
        return 2

    async with open_repository(config, transport=transport) as repository:
        batch = await repository.get_random_photos(count)

    for photo in batch.photos:
        if args.json:
            print(json.dumps(photo.model_dump(mode="json")))
        else:
            print(f"{photo.id}\t{photo.urls.regular}\t{photo.caption}")

    if batch.error is not None:
        print(f"error: {error_description(batch.error)}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = Config()
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        if exc.hint:
            print(f"hint: {exc.hint}", file=sys.stderr)
        return 2

    return asyncio.run(run_cli(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
