"""Command-line entry point: `python -m solagent balance|trade`."""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional

from solagent.agent import SolanaAgent
from solagent.config import get_settings
from solagent.exceptions import SolAgentError
from solagent.swap.executor import DEFAULT_INPUT_DECIMALS
from solagent.tokens import get_decimals, resolve_mint

logger = logging.getLogger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solagent", description="Solana wallet tools")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    balance = sub.add_parser("balance", help="Show SOL or SPL token balance")
    balance.add_argument("--token", type=str, help="Token mint address or symbol (default: SOL)")

    trade = sub.add_parser("trade", help="Swap tokens through Jupiter")
    trade.add_argument("output", type=str, help="Output token mint address or symbol")
    trade.add_argument("amount", type=_decimal, help="Input amount in display units")
    trade.add_argument("--input", type=str, default="USDC", help="Input token (default: USDC)")
    trade.add_argument("--slippage-bps", type=int, help="Slippage tolerance in basis points")
    trade.add_argument("--decimals", type=int, help="Input token decimals (default: known or 6)")

    return parser


async def run(args: argparse.Namespace) -> str:
    async with SolanaAgent.from_settings() as agent:
        if args.command == "balance":
            token = resolve_mint(args.token) if args.token else None
            balance = await agent.get_balance(token)
            label = args.token or "SOL"
            if balance is None:
                return f"{label}: no token account"
            return f"{label}: {balance}"

        decimals: Optional[int] = args.decimals
        if decimals is None:
            decimals = get_decimals(args.input, DEFAULT_INPUT_DECIMALS)
        signature = await agent.trade(
            resolve_mint(args.output),
            args.amount,
            input_mint=resolve_mint(args.input),
            slippage_bps=args.slippage_bps,
            input_decimals=decimals,
        )
        return f"Swap submitted: {signature}"


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if (args.debug or get_settings().debug) else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        print(asyncio.run(run(args)))
    except (SolAgentError, ValueError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
