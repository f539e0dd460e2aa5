from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .api import build_client
from .errors import CbcStreamlinkError, InvalidIdentifier, PlayerProcessError, SchemaError, UpstreamError
from .pipeline import Pipeline
from .playback.player import DEFAULT_PLAYER, LOG_LEVELS, PlayerCommand
from .utils.http_client import HttpClient
from .utils.identifiers import ApiGeneration, IdentifierResolver
from .utils.proxy import for_transport

load_dotenv()

UPSTREAM_HINT = "CBC refused or failed the request; streams are usually geo-blocked outside Canada (try --proxy)."
SCHEMA_HINT = "CBC's response no longer matches what this tool expects; the upstream API may have changed."


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbc-streamlink",
        description="Play CBC live events and replays through streamlink.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("target", nargs="?", metavar="ID-OR-URL", help="CBC.ca watch-page URL or media ID")
    mode.add_argument("-l", "--list", action="store_true", help="List live and upcoming streams")
    mode.add_argument("-r", "--replays", action="store_true", help="List available replays")
    parser.add_argument("-p", "--proxy", default=_env_str("CBC_PROXY"), help="SOCKS proxy, e.g. 1.2.3.4:1080")
    parser.add_argument(
        "-n",
        "--no-run",
        action="store_true",
        help="Print the stream URL (headers on stderr) instead of running the player",
    )
    parser.add_argument(
        "-q",
        "--quality",
        default=_env_str("CBC_QUALITY") or "best",
        help="Stream quality passed to the player (default: best)",
    )
    parser.add_argument(
        "-f",
        "--full-urls",
        action="store_true",
        default=_env_bool("CBC_FULL_URLS"),
        help="Prefix listed IDs with the watch-page URL",
    )
    parser.add_argument(
        "-s",
        "--select-variant",
        action="store_true",
        default=_env_bool("CBC_SELECT_VARIANT"),
        help="Pick the highest-bandwidth variant here and give the player a fixed-quality URL",
    )
    parser.add_argument(
        "--loglevel",
        choices=LOG_LEVELS,
        default=_env_str("CBC_LOGLEVEL"),
        help="Log level forwarded to the player",
    )
    parser.add_argument(
        "--api",
        choices=[generation.value for generation in ApiGeneration],
        default=_env_str("CBC_API") or ApiGeneration.GRAPHQL.value,
        help="CBC API generation to query (default: graphql)",
    )
    parser.add_argument("--player", default=_env_str("CBC_PLAYER") or DEFAULT_PLAYER, help="Player executable")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.api not in {generation.value for generation in ApiGeneration}:
        parser.error(f"unknown API generation {args.api!r}")
    if not (args.target or args.list or args.replays):
        parser.error("ID-OR-URL is required unless --list or --replays is given")
    if args.target:
        try:
            IdentifierResolver(args.api).resolve(args.target)
        except InvalidIdentifier as exc:
            parser.error(str(exc))
    if args.proxy:
        try:
            for_transport(args.proxy)
        except ValueError as exc:
            parser.error(str(exc))
    return args


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def report_failure(exc: CbcStreamlinkError) -> int:
    logging.error("%s", exc)
    if isinstance(exc, UpstreamError):
        logging.error("%s", UPSTREAM_HINT)
    elif isinstance(exc, SchemaError):
        logging.error("%s", SCHEMA_HINT)
    if isinstance(exc, PlayerProcessError) and exc.returncode and exc.returncode > 0:
        return exc.returncode
    return 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    with HttpClient(proxy=args.proxy) as http_client:
        client = build_client(args.api, http_client)
        pipeline = Pipeline(client, http_client, select_variant=args.select_variant)
        try:
            if args.list or args.replays:
                for line in pipeline.list_items(replays=args.replays, full_urls=args.full_urls):
                    print(line)
                return 0
            target = pipeline.resolve(args.target)
        except CbcStreamlinkError as exc:
            return report_failure(exc)

    if args.no_run:
        print(target.url)
        for name, value in target.headers.items():
            print(f"{name}: {value}", file=sys.stderr)
        return 0

    command = PlayerCommand(target.url, quality=args.quality, executable=args.player).with_proxy(args.proxy)
    for name, value in target.headers.items():
        command.with_header(name, value)
    command.with_loglevel(args.loglevel)
    try:
        command.run()
    except PlayerProcessError as exc:
        return report_failure(exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
