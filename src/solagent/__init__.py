"""solagent - Solana wallet balance reads and Jupiter swaps."""

__version__ = "0.1.0"

from solagent.agent import SolanaAgent
from solagent.balance import get_balance, is_account_not_found
from solagent.exceptions import (
    ConfigurationError,
    JupiterAPIError,
    SigningError,
    SolAgentError,
    SwapError,
)
from solagent.swap.executor import trade

__all__ = [
    "SolanaAgent",
    "get_balance",
    "is_account_not_found",
    "trade",
    "SolAgentError",
    "ConfigurationError",
    "JupiterAPIError",
    "SigningError",
    "SwapError",
]
