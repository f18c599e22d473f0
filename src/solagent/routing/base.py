"""Swap request and quote types."""

from dataclasses import dataclass, field
from decimal import Decimal

from solagent.tokens import to_base_units


@dataclass
class SwapRequest:
    """A swap of `amount` input tokens (display units) for output tokens."""

    input_mint: str
    output_mint: str
    amount: Decimal
    slippage_bps: int
    input_decimals: int

    @property
    def amount_in_base_units(self) -> int:
        """Input amount in base units, truncated."""
        return to_base_units(self.amount, self.input_decimals)


@dataclass
class Quote:
    """A swap quote from the aggregator.

    `raw` is the untouched quote response; it is passed back verbatim when
    requesting the swap transaction. The other fields are parsed from it
    for logging and inspection only.
    """

    provider: str
    input_mint: str
    output_mint: str
    in_amount: int
    out_amount: int
    slippage_bps: int
    price_impact_pct: Decimal = Decimal("0")
    route_plan: list = field(default_factory=list)
    raw: dict = field(default_factory=dict)

    @property
    def dex_path(self) -> list[str]:
        """Labels of the AMMs along the route."""
        return [step.get("swapInfo", {}).get("label", "Unknown") for step in self.route_plan]

    @classmethod
    def from_response(cls, provider: str, data: dict) -> "Quote":
        """Build a Quote from a Jupiter quote response.

        Raises:
            KeyError / ValueError: if required fields are missing or malformed
        """
        return cls(
            provider=provider,
            input_mint=data["inputMint"],
            output_mint=data["outputMint"],
            in_amount=int(data["inAmount"]),
            out_amount=int(data["outAmount"]),
            slippage_bps=int(data.get("slippageBps", 0)),
            price_impact_pct=Decimal(str(data.get("priceImpactPct") or "0")),
            route_plan=data.get("routePlan", []),
            raw=data,
        )

