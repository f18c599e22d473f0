"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Solana RPC
    # ======================
    sol_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com", description="Solana RPC URL"
    )

    # ======================
    # Wallet
    # ======================
    wallet_private_key: Optional[str] = Field(
        default=None, description="Base58-encoded 64-byte Solana secret key"
    )
    wallet_seed_phrase: Optional[str] = Field(
        default=None, description="BIP39 seed phrase for m/44'/501'/index'/0' derivation"
    )
    wallet_account_index: int = Field(default=0, description="Account index for seed derivation")

    # ======================
    # Jupiter
    # ======================
    jupiter_api_url: str = Field(
        default="https://quote-api.jup.ag/v6", description="Jupiter quote API base URL"
    )
    jupiter_swap_url: str = Field(
        default="https://quote-api.jup.ag/v6/swap", description="Jupiter swap-construction endpoint"
    )
    jupiter_api_key: str = Field(default="", description="Optional Jupiter API key")
    default_slippage_bps: int = Field(
        default=300, description="Default slippage tolerance in basis points (3%)"
    )
    only_direct_routes: bool = Field(
        default=True, description="Restrict quotes to single-hop routes"
    )
    max_accounts: int = Field(
        default=20, description="Maximum accounts a quoted route may touch"
    )
    http_timeout: float = Field(default=30.0, description="Aggregator HTTP timeout in seconds")

    @property
    def has_wallet(self) -> bool:
        """Check if a private key or seed phrase is configured."""
        if self.wallet_private_key:
            return True
        return bool(self.wallet_seed_phrase and len(self.wallet_seed_phrase.split()) >= 12)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "sol_rpc_url": self.sol_rpc_url,
            "wallet_configured": self.has_wallet,
            "wallet_private_key": "***" if self.wallet_private_key else "(not set)",
            "wallet_seed_phrase": "***" if self.wallet_seed_phrase else "(not set)",
            "wallet_account_index": self.wallet_account_index,
            "jupiter": {
                "api_url": self.jupiter_api_url,
                "swap_url": self.jupiter_swap_url,
                "api_key": "***" if self.jupiter_api_key else "(not set)",
                "slippage_bps": self.default_slippage_bps,
                "only_direct_routes": self.only_direct_routes,
                "max_accounts": self.max_accounts,
                "timeout": self.http_timeout,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
