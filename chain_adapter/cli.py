"""Command-line interface for the chain adapter."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys

from .adapter import ChainAdapter
from .config import load_config
from .errors import AdapterError
from .logging_setup import configure_logging
from .models import (
    Address,
    BalanceRequest,
    CodeRequest,
    FungibleBalanceRequest,
    Request,
    TransferRequest,
    parse_identity,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="chain-adapter",
        description="Query balances and send guarded transfers on an EVM node",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    balance = sub.add_parser("balance", help="Native balance in wei")
    balance.add_argument("who", help="0x address or ENS name")

    code = sub.add_parser("code", help="Check whether contract code is deployed")
    code.add_argument("addr")

    erc20 = sub.add_parser("erc20-balance", help="ERC-20 balanceOf")
    erc20.add_argument("token")
    erc20.add_argument("holder")

    send = sub.add_parser("send", help="Transfer native value (simulated by default)")
    send.add_argument("sender")
    send.add_argument("recipient")
    send.add_argument("amount", help="Amount in ether, e.g. 0.1")
    send.add_argument(
        "--broadcast",
        action="store_true",
        help="Sign and submit instead of simulating",
    )
    send.add_argument(
        "--fork-block",
        type=int,
        default=None,
        help="Estimate and simulate against this block number",
    )

    return parser


def build_request(args: argparse.Namespace) -> Request:
    """Translate parsed arguments into a typed request."""
    if args.command == "balance":
        return BalanceRequest(who=parse_identity(args.who))
    if args.command == "code":
        return CodeRequest(addr=Address(args.addr))
    if args.command == "erc20-balance":
        return FungibleBalanceRequest(token=Address(args.token), holder=Address(args.holder))
    if args.command == "send":
        return (
            TransferRequest.builder()
            .sender(Address(args.sender))
            .recipient(Address(args.recipient))
            .amount_eth(args.amount)
            .simulate(not args.broadcast)
            .fork_block(args.fork_block)
            .build()
        )
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    adapter = ChainAdapter(config)

    request = build_request(args)
    try:
        response = await adapter.handle(request)
    except AdapterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(dataclasses.asdict(response), indent=2))
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
