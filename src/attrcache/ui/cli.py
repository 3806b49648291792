from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from attrcache.app import (
    add_directory_person,
    build_attributes_repository,
    purge_expired_cache_entries,
    resolve_principal_attributes,
)
from attrcache.config import ConfigurationError, configure_logging, parse_merging_strategy

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from attrcache.domain.types import AttributeValue

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve and cache principal attributes")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve attributes for a principal")
    resolve.add_argument("principal_id", help="Identifier of the authenticated principal")
    resolve.add_argument(
        "--attribute",
        "-a",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Attribute already carried by the principal (repeat for multiple values)",
    )
    resolve.add_argument(
        "--strategy",
        type=str,
        help="Merging strategy: REPLACE, ADD, NONE or MULTIVALUED (defaults to config)",
    )

    person = subparsers.add_parser("person", help="SQL directory commands")
    person_sub = person.add_subparsers(dest="person_command", required=True)
    person_add = person_sub.add_parser("add", help="Create or replace a person")
    person_add.add_argument("person_id", help="Identifier of the person")
    person_add.add_argument(
        "--attribute",
        "-a",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Attribute to store (repeat for multiple values)",
    )

    cache = subparsers.add_parser("cache", help="SQL attribute cache commands")
    cache_sub = cache.add_subparsers(dest="cache_command", required=True)
    cache_sub.add_parser("purge", help="Delete expired cache entries")

    return parser.parse_args(list(argv))


def _parse_attributes(pairs: Sequence[str]) -> dict[str, AttributeValue]:
    collected: dict[str, list[str]] = {}
    for pair in pairs:
        name, separator, value = pair.partition("=")
        if not separator or not name.strip():
            raise ValueError(f"Invalid attribute (expected NAME=VALUE): {pair}")
        collected.setdefault(name.strip(), []).append(value)
    return {name: values[0] if len(values) == 1 else values for name, values in collected.items()}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        attributes = _parse_attributes(getattr(parsed_args, "attribute", []))
        strategy = (
            parse_merging_strategy(parsed_args.strategy)
            if parsed_args.command == "resolve" and parsed_args.strategy
            else None
        )
    except (ValueError, ConfigurationError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "resolve":
            repository = (
                build_attributes_repository(merging_strategy=strategy)
                if strategy is not None
                else build_attributes_repository()
            )
            with repository:
                result = resolve_principal_attributes(
                    parsed_args.principal_id,
                    attributes,
                    repository=repository,
                )
            print(json.dumps(result, indent=2, sort_keys=True, default=str))  # noqa: T201
        elif parsed_args.command == "person" and parsed_args.person_command == "add":
            add_directory_person(parsed_args.person_id, attributes)
        elif parsed_args.command == "cache" and parsed_args.cache_command == "purge":
            removed = purge_expired_cache_entries()
            log.info("Removed %s expired cache entries", removed)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
