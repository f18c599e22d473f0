"""Wallet balance reads for SOL and SPL tokens."""

import logging
from typing import Optional

from solagent.tokens import LAMPORTS_PER_SOL, PubkeyLike, derive_associated_token_address

logger = logging.getLogger(__name__)

# Substrings the RPC node uses when a token account does not exist.
# The client has no structured error kind for this case.
ACCOUNT_NOT_FOUND_MARKERS = (
    "could not find account",
    "Invalid param",
)


def is_account_not_found(error: BaseException) -> bool:
    """Check whether an RPC failure means the token account does not exist."""
    message = str(error)
    return any(marker in message for marker in ACCOUNT_NOT_FOUND_MARKERS)


async def get_balance(agent, token_address: Optional[PubkeyLike] = None) -> Optional[float]:
    """Get the balance of SOL or an SPL token for the agent's wallet.

    Args:
        agent: Owner context exposing `connection` and `wallet_address`
        token_address: Optional SPL token mint. If not provided, returns SOL balance

    Returns:
        Balance in display units, or None if the token account doesn't exist
    """
    if token_address is None:
        response = await agent.connection.get_balance(agent.wallet_address)
        return response.value / LAMPORTS_PER_SOL

    try:
        ata = derive_associated_token_address(token_address, agent.wallet_address)
        response = await agent.connection.get_token_account_balance(ata)
        return response.value.ui_amount
    except Exception as e:
        if is_account_not_found(e):
            logger.debug(f"No token account for {token_address} owned by {agent.wallet_address}")
            return None
        raise
