from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ipamkeeper.app import (
    add_ip_address,
    delete_ip_address,
    get_ip_address,
    list_events,
    reconcile_ip_address,
)
from ipamkeeper.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_identity_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Name of the IP address resource")
    parser.add_argument(
        "-n",
        "--namespace",
        default="default",
        help="Namespace of the resource (default: %(default)s)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile IP address resources against IPAM")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Store a new IP address resource")
    _add_identity_arguments(add)
    add.add_argument("--display-name", type=str, help="Explicit IPAM name for the address")
    add.add_argument("--ref", type=str, help="Query selecting an existing address to borrow")

    reconcile = subparsers.add_parser("reconcile", help="Assign or resolve the address")
    _add_identity_arguments(reconcile)

    delete = subparsers.add_parser("delete", help="Release the address and drop the resource")
    _add_identity_arguments(delete)

    show = subparsers.add_parser("show", help="Print a resource and its status")
    _add_identity_arguments(show)

    events = subparsers.add_parser("events", help="List events recorded for a resource")
    _add_identity_arguments(events)

    args = parser.parse_args(list(argv))
    if args.command == "add" and args.display_name is not None and not args.display_name.strip():
        parser.error("--display-name must not be blank")
    return args


def _run(args: argparse.Namespace) -> None:
    identity = {"namespace": args.namespace, "name": args.name}
    if args.command == "add":
        add_ip_address(**identity, display_name=args.display_name, ref=args.ref)
    elif args.command == "reconcile":
        reconcile_ip_address(**identity)
    elif args.command == "delete":
        delete_ip_address(**identity)
    elif args.command == "show":
        resource = get_ip_address(**identity)
        status = resource.status
        log.info(
            "%s: address=%s name=%s provider=%s ref=%s version=%s",
            resource.key,
            status.address or "-",
            status.name or "-",
            status.provider or "-",
            resource.spec.ref or "-",
            resource.version,
        )
    elif args.command == "events":
        for event in list_events(**identity):
            log.info("%s %s %s", event.last_timestamp.isoformat(), event.type, event.message)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run(parsed_args)
    except Exception:
        log.exception("Command %s failed", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
