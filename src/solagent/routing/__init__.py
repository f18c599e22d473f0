"""Routing module: Jupiter aggregator client and swap types."""

from solagent.routing.base import Quote, SwapRequest
from solagent.routing.jupiter import JUPITER_API_V6, JUPITER_SWAP_URL, JupiterClient

__all__ = [
    "Quote",
    "SwapRequest",
    "JupiterClient",
    "JUPITER_API_V6",
    "JUPITER_SWAP_URL",
]
