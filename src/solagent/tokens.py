"""Solana token registry and unit helpers."""

from decimal import ROUND_FLOOR, Decimal
from typing import Union

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

# Lamports in one SOL
LAMPORTS_PER_SOL = 1_000_000_000

# Token mint addresses on Solana mainnet
SOLANA_TOKENS = {
    "SOL": "So11111111111111111111111111111111111111112",  # Wrapped SOL
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "RAY": "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R",
    "ORCA": "orcaEKTdK7LKz57vaAYr9QeNsVEPfiu6QeMU1kektZE",
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    "WIF": "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm",
    "PYTH": "HZ1JovNiVvGrGNiiYvEozEVgZ58xaU3RKwX8eACQBCt3",
    "MNDE": "MNDEFzGvMt87ueuHvVU9VcTqsAP5b3fTGPsHuuPA5ey",
}

# Token decimals
TOKEN_DECIMALS = {
    "SOL": 9,
    "USDT": 6,
    "USDC": 6,
    "RAY": 6,
    "ORCA": 6,
    "JUP": 6,
    "BONK": 5,
    "WIF": 6,
    "PYTH": 6,
    "MNDE": 9,
}

USDC_MINT = Pubkey.from_string(SOLANA_TOKENS["USDC"])

PubkeyLike = Union[Pubkey, str]


def resolve_mint(value: PubkeyLike) -> Pubkey:
    """Resolve a token symbol (e.g. "USDC") or base58 address to a Pubkey.

    Raises:
        ValueError: if the value is neither a known symbol nor a valid address
    """
    if isinstance(value, Pubkey):
        return value
    mint = SOLANA_TOKENS.get(value.upper())
    return Pubkey.from_string(mint or value)


def get_decimals(value: PubkeyLike, default: int = 6) -> int:
    """Get decimals for a known symbol or mint address."""
    if isinstance(value, str) and value.upper() in TOKEN_DECIMALS:
        return TOKEN_DECIMALS[value.upper()]
    address = str(value)
    for symbol, mint in SOLANA_TOKENS.items():
        if mint == address:
            return TOKEN_DECIMALS[symbol]
    return default


def to_base_units(amount: Union[Decimal, float, int, str], decimals: int) -> int:
    """Convert a display amount to integer base units, truncating.

    Floats go through their shortest repr, so 2.5 at 6 decimals is exactly
    2500000 and 0.1234567 is 123456.
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    scaled = value.scaleb(decimals)
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def derive_associated_token_address(mint: PubkeyLike, owner: PubkeyLike) -> Pubkey:
    """Derive the associated token account for (mint, owner)."""
    if not isinstance(owner, Pubkey):
        owner = Pubkey.from_string(owner)
    return get_associated_token_address(owner, resolve_mint(mint))
