# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from terradactyl.app import (
    apply_plan,
    build_provider,
    destroy_resource,
    import_resource,
    read_data_source,
)
from terradactyl.config import configure_logging
from terradactyl.provider import ProviderError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

# flag name -> data source attribute
LOOKUP_FLAGS: dict[str, str] = {
    "--id": "id",
    "--uuid": "uuid",
    "--name": "name",
    "--username": "username",
    "--email": "email",
    "--external-id": "external_id",
    "--short": "short",
    "--long": "long",
    "--location-id": "location_id",
    "--node-id": "node_id",
}
INT_ATTRIBUTES = frozenset({"id", "location_id", "node_id"})


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage a Pterodactyl panel")
    parser.add_argument("--host", type=str, help="Panel URL (defaults to PTERODACTYL_HOST)")
    parser.add_argument(
        "--api-key",
        type=str,
        help="Application API key (defaults to PTERODACTYL_API_KEY)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    data = subparsers.add_parser("data", help="Read a data source and print its state")
    data.add_argument("type_name", help="Data source type, e.g. node or pterodactyl_nodes")
    for flag, attribute in LOOKUP_FLAGS.items():
        data.add_argument(
            flag,
            dest=attribute,
            type=int if attribute in INT_ATTRIBUTES else str,
            help=f"Look up by {attribute}",
        )

    import_ = subparsers.add_parser("import", help="Import a resource by id")
    import_.add_argument("type_name", help="Resource type, e.g. user")
    import_.add_argument("resource_id", help="Numeric panel id")

    apply = subparsers.add_parser("apply", help="Create or update a resource from a JSON plan")
    apply.add_argument("type_name", help="Resource type, e.g. node")
    apply.add_argument("plan", type=Path, help="JSON file holding the planned attributes")

    destroy = subparsers.add_parser("destroy", help="Delete a resource by id")
    destroy.add_argument("type_name", help="Resource type, e.g. location")
    destroy.add_argument("resource_id", help="Numeric panel id")

    return parser.parse_args(list(argv))


def _lookup_attributes(args: argparse.Namespace) -> dict[str, object]:
    values = {attribute: getattr(args, attribute) for attribute in LOOKUP_FLAGS.values()}
    return {key: value for key, value in values.items() if value is not None}


def _load_plan(path: Path) -> dict[str, object]:
    try:
        plan = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read plan {path}: {exc}") from exc
    if not isinstance(plan, dict):
        raise ValueError(f"Plan {path} must hold a JSON object")
    return plan


def _print_state(state: dict[str, object]) -> None:
    print(json.dumps(state, indent=2, sort_keys=True))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        plan = _load_plan(parsed_args.plan) if parsed_args.command == "apply" else None
        provider = build_provider(host=parsed_args.host, api_key=parsed_args.api_key)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except ProviderError as exc:
        log.error("%s: %s", exc.summary, exc.detail)  # noqa: TRY400
        sys.exit(2)

    try:
        if parsed_args.command == "data":
            _print_state(
                read_data_source(provider, parsed_args.type_name, _lookup_attributes(parsed_args))
            )
        elif parsed_args.command == "import":
            _print_state(import_resource(provider, parsed_args.type_name, parsed_args.resource_id))
        elif parsed_args.command == "apply" and plan is not None:
            _print_state(apply_plan(provider, parsed_args.type_name, plan))
        elif parsed_args.command == "destroy":
            destroy_resource(provider, parsed_args.type_name, parsed_args.resource_id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ProviderError as exc:
        log.error("%s: %s", exc.summary, exc.detail)  # noqa: TRY400
        if is_dataclass(exc.state) and not isinstance(exc.state, type):
            # partial state of a resource the panel already holds
            _print_state(asdict(exc.state))
        sys.exit(1)
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
