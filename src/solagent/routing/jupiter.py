"""Jupiter DEX aggregator client for Solana.

Uses Jupiter Aggregator API for quotes and prebuilt swap transactions.
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Optional

import httpx

from solagent.config import Settings
from solagent.exceptions import JupiterAPIError
from solagent.routing.base import Quote, SwapRequest

logger = logging.getLogger(__name__)

# Jupiter API endpoints
JUPITER_API_V6 = "https://quote-api.jup.ag/v6"
JUPITER_SWAP_URL = f"{JUPITER_API_V6}/swap"


class JupiterClient:
    """Client for Jupiter's quote and swap-construction endpoints.

    Jupiter aggregates liquidity from Raydium, Orca, Meteora, and other
    Solana DEXes. Route-finding and transaction building happen on their
    side; this client only moves JSON back and forth.
    """

    def __init__(
        self,
        base_url: str = JUPITER_API_V6,
        swap_url: str = JUPITER_SWAP_URL,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        only_direct_routes: bool = True,
        max_accounts: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Jupiter client.

        Args:
            base_url: Quote API base URL
            swap_url: Swap-construction endpoint
            api_key: Optional API key for higher rate limits
            timeout: HTTP timeout in seconds
            only_direct_routes: Restrict quotes to single-hop routes
            max_accounts: Maximum accounts a quoted route may touch
            transport: Optional httpx transport (used in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.swap_url = swap_url
        self.api_key = api_key
        self.timeout = timeout
        self.only_direct_routes = only_direct_routes
        self.max_accounts = max_accounts
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "JupiterClient":
        return cls(
            base_url=settings.jupiter_api_url,
            swap_url=settings.jupiter_swap_url,
            api_key=settings.jupiter_api_key or None,
            timeout=settings.http_timeout,
            only_direct_routes=settings.only_direct_routes,
            max_accounts=settings.max_accounts,
        )

    @property
    def name(self) -> str:
        return "Jupiter"

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def get_quote(self, request: SwapRequest) -> Quote:
        """Get swap quote from Jupiter.

        Args:
            request: Swap request (amount in display units)

        Returns:
            Quote wrapping the raw quote response

        Raises:
            JupiterAPIError: on non-200 responses or malformed payloads
        """
        params = {
            "inputMint": request.input_mint,
            "outputMint": request.output_mint,
            "amount": str(request.amount_in_base_units),
            "slippageBps": str(request.slippage_bps),
            "onlyDirectRoutes": "true" if self.only_direct_routes else "false",
            "maxAccounts": str(self.max_accounts),
        }
        logger.debug(f"Requesting Jupiter quote: {params}")

        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/quote",
                headers=self._get_headers(),
                params=params,
            )

        if response.status_code != 200:
            raise JupiterAPIError(
                f"Jupiter quote API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        data = response.json()
        try:
            quote = Quote.from_response(self.name, data)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise JupiterAPIError(f"Malformed Jupiter quote: {e!r}") from e

        logger.info(
            f"Jupiter quote: {quote.in_amount} {quote.input_mint} -> "
            f"{quote.out_amount} {quote.output_mint} via {' -> '.join(quote.dex_path) or 'n/a'} "
            f"(price impact: {quote.price_impact_pct}%)"
        )
        return quote

    async def get_swap_transaction(self, quote: Quote, user_public_key: str) -> str:
        """Get a serialized, unsigned swap transaction for a quote.

        Returns:
            Base64-encoded versioned transaction

        Raises:
            JupiterAPIError: on non-200 responses or a missing transaction
        """
        async with self._client() as client:
            response = await client.post(
                self.swap_url,
                headers=self._get_headers(),
                json={
                    "quoteResponse": quote.raw,
                    "userPublicKey": user_public_key,
                    "wrapAndUnwrapSol": True,
                    "dynamicComputeUnitLimit": True,
                    "prioritizationFeeLamports": "auto",
                },
            )

        if response.status_code != 200:
            raise JupiterAPIError(
                f"Jupiter swap API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        swap_transaction = response.json().get("swapTransaction")
        if not swap_transaction:
            raise JupiterAPIError("No swap transaction returned")

        return swap_transaction
