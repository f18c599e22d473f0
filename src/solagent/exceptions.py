"""Exceptions raised by solagent."""

from typing import Optional


class SolAgentError(Exception):
    """Base exception for all solagent errors."""


class ConfigurationError(SolAgentError):
    """Missing or invalid configuration (e.g. no wallet key)."""


class JupiterAPIError(SolAgentError):
    """Jupiter aggregator returned an error or an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SigningError(SolAgentError):
    """The wallet could not sign the transaction."""


class SwapError(SolAgentError):
    """A swap failed at some step of the quote/build/sign/submit pipeline.

    Attributes:
        step: Name of the pipeline step that failed
        reason: Original error message
    """

    def __init__(self, reason: str, step: Optional[str] = None):
        super().__init__(f"Swap failed: {reason}")
        self.reason = reason
        self.step = step
