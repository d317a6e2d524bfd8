from importlib.metadata import PackageNotFoundError, version
from logging.config import dictConfig
from typing import Callable, List, Optional, Sequence
import argparse
import asyncio
import json
import logging
import os
import sys

import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.graze.nostr.app.config import Settings, create_client_session
from social.graze.nostr.errors import DomainError, KeyFormatError, KeyGenerationError
from social.graze.nostr.keys.codec import convert_batch, decode_to_hex, encode_from_hex
from social.graze.nostr.keys.generate import generate_keypair, render_keypair
from social.graze.nostr.keys.prefix import PREFIX_LABELS, Prefix
from social.graze.nostr.resolve.domain import DomainValidator
from social.graze.nostr.resolve.nip05 import IdentityResolver

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "graze-nostr-keys"


def configure_logging(settings: Settings) -> None:
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if settings.debug else logging.WARNING)


def package_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0+unknown"


def split_values(raw: Optional[str]) -> List[str]:
    """Split a comma separated argument, trimming whitespace and dropping empty items."""
    if raw is None:
        return []
    return [value.strip() for value in raw.split(",") if value.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nostr-key",
        description="Convert nostr keys and note ids between hex and bech32, "
        "resolve NIP-05 identities, or generate a keypair.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {package_version()}"
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--to-hex",
        action="store_true",
        help="Convert from bech32 to hex.",
    )
    mode.add_argument(
        "-k",
        "--kind",
        choices=list(PREFIX_LABELS.values()),
        help="The kind of entity you are converting from hex to bech32.",
    )
    mode.add_argument(
        "--nip05",
        metavar="DOMAINS",
        help="Comma separated domains whose nostr.json should be resolved to npubs.",
    )
    mode.add_argument(
        "--generate",
        action="store_true",
        help="Generate a new keypair.",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="With --nip05, print a domain=<domain>|count=<n> line per domain.",
    )
    parser.add_argument(
        "key",
        nargs="?",
        help="Comma separated keys or note ids to convert.",
    )
    return parser


def run_conversion(keys: Sequence[str], convert: Callable[[str], str]) -> int:
    """Print each converted key, stopping at the first key that fails."""
    try:
        for converted in convert_batch(keys, convert):
            print(converted)
    except KeyFormatError as e:
        logger.debug("Conversion stopped at %r", e.value)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


async def run_resolve(
    settings: Settings,
    domains: Sequence[str],
    emit_stats: bool,
    validator: Optional[DomainValidator] = None,
) -> int:
    if validator is None:
        validator = DomainValidator()

    try:
        domains = validator.validate_all(domains)
    except DomainError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    async with create_client_session(settings) as session:
        resolver = IdentityResolver(session, settings.well_known_path)
        resolutions = await resolver.resolve_all(domains, emit_stats)

    exit_code = 0
    for resolution in resolutions:
        for line in resolution.render():
            print(line)
        if not resolution.ok:
            exit_code = 1
    return exit_code


def run_generate() -> int:
    for line in render_keypair(generate_keypair()):
        print(line)
    return 0


async def realMain(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.stats and args.nip05 is None:
        parser.error("--stats can only be used with --nip05")

    converting = args.to_hex or args.kind is not None
    if converting and args.key is None:
        parser.error("a key or note id is required with --to-hex or --kind")
    if not converting and args.key is not None:
        parser.error("a key can only be given with --to-hex or --kind")

    settings = Settings()  # type: ignore
    configure_logging(settings)

    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, integrations=[AioHttpIntegration()])

    if args.to_hex:
        return run_conversion(split_values(args.key), decode_to_hex)

    if args.kind is not None:
        prefix = Prefix.from_label(args.kind)
        return run_conversion(
            split_values(args.key), lambda value: encode_from_hex(prefix, value)
        )

    if args.nip05 is not None:
        return await run_resolve(settings, split_values(args.nip05), args.stats)

    return run_generate()


def main() -> None:
    try:
        exit_code = asyncio.run(realMain())
    except KeyGenerationError as e:
        sys.exit(f"fatal: {e}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
