"""Solana wallet agent: a connection, a keypair and a Jupiter client."""

import logging
from decimal import Decimal
from typing import Optional, Union

from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solagent.balance import get_balance
from solagent.config import Settings, get_settings
from solagent.routing.jupiter import JupiterClient
from solagent.swap.executor import DEFAULT_INPUT_DECIMALS, DEFAULT_SLIPPAGE_BPS, trade
from solagent.swap.signer import SolanaSigner
from solagent.tokens import USDC_MINT, PubkeyLike

logger = logging.getLogger(__name__)


class SolanaAgent:
    """Owner context for balance reads and swaps."""

    def __init__(
        self,
        wallet: Keypair,
        connection: AsyncClient,
        jupiter: Optional[JupiterClient] = None,
        default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    ):
        self.wallet = wallet
        self.connection = connection
        self.jupiter = jupiter or JupiterClient()
        self.default_slippage_bps = default_slippage_bps

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SolanaAgent":
        """Build an agent from configuration.

        Raises:
            ConfigurationError: if no usable wallet key is configured
        """
        settings = settings or get_settings()
        signer = SolanaSigner.from_settings(settings)
        logger.info(f"Loaded wallet {signer.get_address()} (RPC: {settings.sol_rpc_url})")
        return cls(
            wallet=signer.keypair,
            connection=AsyncClient(settings.sol_rpc_url),
            jupiter=JupiterClient.from_settings(settings),
            default_slippage_bps=settings.default_slippage_bps,
        )

    @property
    def wallet_address(self) -> Pubkey:
        return self.wallet.pubkey()

    async def get_balance(self, token_address: Optional[PubkeyLike] = None) -> Optional[float]:
        return await get_balance(self, token_address)

    async def trade(
        self,
        output_mint: PubkeyLike,
        input_amount: Union[Decimal, float, int, str],
        input_mint: PubkeyLike = USDC_MINT,
        slippage_bps: Optional[int] = None,
        input_decimals: int = DEFAULT_INPUT_DECIMALS,
    ) -> str:
        if slippage_bps is None:
            slippage_bps = self.default_slippage_bps
        return await trade(
            self,
            output_mint,
            input_amount,
            input_mint,
            slippage_bps,
            input_decimals,
            jupiter=self.jupiter,
        )

    async def close(self) -> None:
        await self.connection.close()

    async def __aenter__(self) -> "SolanaAgent":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
