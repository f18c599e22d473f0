"""Jupiter swap execution on Solana.

A swap is a fixed pipeline of fallible steps:

1. prepare: convert the display amount to base units
2. quote:   GET a quote from Jupiter
3. build:   POST the quote back for a prebuilt, unsigned transaction
4. sign:    decode the transaction and attach the wallet signature
5. submit:  send the signed transaction over RPC

Each step yields a StepResult. The pipeline stops at the first failure, so
nothing is submitted unless every earlier step succeeded.
"""

import inspect
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional, Union

from solagent.config import get_settings
from solagent.exceptions import SwapError
from solagent.routing.base import Quote, SwapRequest
from solagent.routing.jupiter import JupiterClient
from solagent.swap.signer import SolanaSigner
from solagent.tokens import USDC_MINT, PubkeyLike, resolve_mint

logger = logging.getLogger(__name__)

DEFAULT_SLIPPAGE_BPS = 300
DEFAULT_INPUT_DECIMALS = 6  # USDC, the default input token


@dataclass
class StepResult:
    """Outcome of one pipeline step."""

    step: str
    success: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, step: str, value: Any) -> "StepResult":
        return cls(step=step, success=True, value=value)

    @classmethod
    def fail(cls, step: str, error: str) -> "StepResult":
        return cls(step=step, success=False, error=error)


@dataclass
class SwapResult:
    """Result of a swap execution."""

    success: bool
    request: SwapRequest
    quote: Optional[Quote] = None
    tx_signature: Optional[str] = None
    error: Optional[str] = None
    failed_step: Optional[str] = None


class SwapExecutor:
    """Runs the quote -> build -> sign -> submit pipeline for one wallet."""

    def __init__(self, connection, signer: SolanaSigner, jupiter: JupiterClient):
        self.connection = connection
        self.signer = signer
        self.jupiter = jupiter

    async def _run_step(self, step: str, func: Callable, *args) -> StepResult:
        try:
            value = func(*args)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.error(f"Swap step '{step}' failed: {type(e).__name__}: {error}")
            return StepResult.fail(step, error)
        logger.debug(f"Swap step '{step}' completed")
        return StepResult.ok(step, value)

    @staticmethod
    def _prepare(request: SwapRequest) -> int:
        if request.amount <= 0:
            raise ValueError(f"Input amount must be positive, got {request.amount}")
        base_units = request.amount_in_base_units
        if base_units <= 0:
            raise ValueError(
                f"Input amount {request.amount} is below one base unit "
                f"at {request.input_decimals} decimals"
            )
        return base_units

    async def _submit(self, tx) -> str:
        response = await self.connection.send_transaction(tx)
        return str(response.value)

    async def execute(self, request: SwapRequest) -> SwapResult:
        """Execute a swap. Never raises; failures come back in the result."""
        logger.info(
            f"Swapping {request.amount} {request.input_mint} -> {request.output_mint} "
            f"(slippage: {request.slippage_bps} bps)"
        )

        result = await self._run_step("prepare", self._prepare, request)
        if not result.success:
            return self._failed(request, result)

        result = await self._run_step("quote", self.jupiter.get_quote, request)
        if not result.success:
            return self._failed(request, result)
        quote = result.value

        result = await self._run_step(
            "build", self.jupiter.get_swap_transaction, quote, self.signer.get_address()
        )
        if not result.success:
            return self._failed(request, result, quote)

        result = await self._run_step("sign", self.signer.decode_and_sign, result.value)
        if not result.success:
            return self._failed(request, result, quote)

        result = await self._run_step("submit", self._submit, result.value)
        if not result.success:
            return self._failed(request, result, quote)

        logger.info(f"Swap submitted: {result.value}")
        return SwapResult(success=True, request=request, quote=quote, tx_signature=result.value)

    @staticmethod
    def _failed(request: SwapRequest, step: StepResult, quote: Optional[Quote] = None) -> SwapResult:
        return SwapResult(
            success=False,
            request=request,
            quote=quote,
            error=step.error,
            failed_step=step.step,
        )


async def trade(
    agent,
    output_mint: PubkeyLike,
    input_amount: Union[Decimal, float, int, str],
    input_mint: PubkeyLike = USDC_MINT,
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    input_decimals: int = DEFAULT_INPUT_DECIMALS,
    *,
    jupiter: Optional[JupiterClient] = None,
) -> str:
    """Swap tokens using Jupiter.

    Args:
        agent: Owner context exposing `connection` and `wallet`
        output_mint: Target token mint address (or known symbol)
        input_amount: Amount to swap in display units, e.g. 1.5 SOL or 100 USDC
        input_mint: Source token mint address (defaults to USDC)
        slippage_bps: Slippage tolerance in basis points (300 = 3%)
        input_decimals: Decimals of the input token (6 for USDC, 9 for SOL)
        jupiter: Jupiter client; defaults to the agent's, then to settings

    Returns:
        Transaction signature

    Raises:
        SwapError: on any failure, wrapping the original message
    """
    try:
        request = SwapRequest(
            input_mint=str(resolve_mint(input_mint)),
            output_mint=str(resolve_mint(output_mint)),
            amount=input_amount if isinstance(input_amount, Decimal) else Decimal(str(input_amount)),
            slippage_bps=slippage_bps,
            input_decimals=input_decimals,
        )
    except Exception as e:
        raise SwapError(str(e) or type(e).__name__, step="prepare") from e

    if jupiter is None:
        jupiter = getattr(agent, "jupiter", None) or JupiterClient.from_settings(get_settings())

    executor = SwapExecutor(agent.connection, SolanaSigner(agent.wallet), jupiter)
    result = await executor.execute(request)
    if not result.success:
        raise SwapError(result.error, step=result.failed_step)
    return result.tx_signature
