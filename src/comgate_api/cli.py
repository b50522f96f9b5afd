"""
Command-line interface for exercising the Comgate API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any, Callable, Dict, Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import ComgateClient
from .core.errors import ComgateError, HTTPError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def _create_payment(client: ComgateClient, args: argparse.Namespace) -> Any:
    attrs: Dict[str, Any] = _collect_pairs(args.field or ())
    for key in ("price", "curr", "label", "ref_id", "email", "phone", "full_name", "method", "test"):
        value = getattr(args, key)
        if value is not None:
            attrs[key] = value
    return client.create_payment(**attrs)


def _payment_status(client: ComgateClient, args: argparse.Namespace) -> Any:
    return client.payment_status(trans_id=args.trans_id)


def _cancel_payment(client: ComgateClient, args: argparse.Namespace) -> Any:
    return client.cancel_payment(trans_id=args.trans_id)


def _transfer_list(client: ComgateClient, args: argparse.Namespace) -> Any:
    attrs: Dict[str, Any] = {"date": args.date}
    if args.test is not None:
        attrs["test"] = args.test
    return client.transfer_list(**attrs)


def _single_transfer(client: ComgateClient, args: argparse.Namespace) -> Any:
    attrs: Dict[str, Any] = {"transfer_id": args.transfer_id}
    if args.test is not None:
        attrs["test"] = args.test
    return client.single_transfer(**attrs)


def _add_test_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--test",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Send the request in test mode (default: COMGATE_TEST)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comgate-api",
        description="Call a single Comgate payment gateway operation",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing COMGATE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-payment", help="Create a new payment")
    create.add_argument("--price", type=int, required=True, help="Price in cents (min. 100)")
    create.add_argument("--curr", default="CZK", help="Currency code (default: CZK)")
    create.add_argument("--label", required=True, help="Short product label (1-16 chars)")
    create.add_argument("--ref-id", dest="ref_id", required=True, help="Merchant reference")
    create.add_argument("--email", help="Payer e-mail")
    create.add_argument("--phone", help="Payer phone number")
    create.add_argument("--full-name", dest="full_name", help="Payer full name")
    create.add_argument("--method", help="Payment method filter (default: COMGATE_METHODS)")
    create.add_argument(
        "--field",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Any other create-payment attribute, e.g. lang=cs",
    )
    _add_test_flag(create)
    create.set_defaults(handler=_create_payment)

    status = commands.add_parser("payment-status", help="Fetch the status of a payment")
    status.add_argument("trans_id", help="Transaction id returned by create-payment")
    status.set_defaults(handler=_payment_status)

    cancel = commands.add_parser("cancel-payment", help="Cancel a pending payment")
    cancel.add_argument("trans_id", help="Transaction id returned by create-payment")
    cancel.set_defaults(handler=_cancel_payment)

    transfers = commands.add_parser("transfer-list", help="List transfers for a date")
    transfers.add_argument(
        "date",
        nargs="?",
        default=date.today().isoformat(),
        help="Date in YYYY-MM-DD format (default: today)",
    )
    _add_test_flag(transfers)
    transfers.set_defaults(handler=_transfer_list)

    transfer = commands.add_parser("single-transfer", help="Fetch one transfer's detail")
    transfer.add_argument("transfer_id", help="Transfer id returned by transfer-list")
    _add_test_flag(transfer)
    transfer.set_defaults(handler=_single_transfer)

    return parser


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: requests.Session | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())
    handler: Callable[[ComgateClient, argparse.Namespace], Any] = args.handler

    try:
        client = create_client(env_file=args.env_file, overrides=overrides, session=session)
        with client:
            result = handler(client, args)
    except HTTPError as exc:
        logging.error("%s: %s", type(exc).__name__, exc)
        if exc.body:
            logging.error("Response body: %s", exc.body)
        return 1
    except ComgateError as exc:
        logging.error("%s: %s", type(exc).__name__, exc)
        return 1
    except requests.RequestException as exc:
        logging.error("Request to Comgate failed: %s", exc)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    sys.exit(run_cli())
