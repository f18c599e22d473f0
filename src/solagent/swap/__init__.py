"""Swap execution module.

Provides:
- SwapExecutor / trade: Jupiter quote -> build -> sign -> submit pipeline
- SolanaSigner: wallet loading and transaction signing
"""

from solagent.swap.executor import StepResult, SwapExecutor, SwapResult, trade
from solagent.swap.signer import SolanaSigner

__all__ = [
    # Executor
    "SwapExecutor",
    "SwapResult",
    "StepResult",
    "trade",
    # Signer
    "SolanaSigner",
]
