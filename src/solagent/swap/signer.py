"""Solana wallet loading and transaction signing."""

import base64
import logging
from typing import Optional

import base58
from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from solagent.config import Settings
from solagent.exceptions import ConfigurationError, SigningError

logger = logging.getLogger(__name__)


class SolanaSigner:
    """Signer for Solana versioned transactions."""

    def __init__(self, keypair: Keypair):
        self.keypair = keypair

    @classmethod
    def from_base58(cls, secret: str) -> "SolanaSigner":
        """Load a signer from a base58-encoded 64-byte secret key."""
        try:
            raw = base58.b58decode(secret.strip())
        except ValueError as e:
            raise ConfigurationError(f"Invalid Solana private key: {e}") from e
        if len(raw) != 64:
            raise ConfigurationError(f"Invalid Solana private key: expected 64 bytes, got {len(raw)}")
        try:
            return cls(Keypair.from_bytes(raw))
        except ValueError as e:
            raise ConfigurationError(f"Invalid Solana private key: {e}") from e

    @classmethod
    def from_seed_phrase(cls, seed_phrase: str, index: int = 0) -> "SolanaSigner":
        """Derive Solana keypair from seed phrase.

        Uses standard BIP44 path: m/44'/501'/account'/change'
        Phantom / Trust Wallet main account: m/44'/501'/0'/0'
        Additional accounts: m/44'/501'/index'/0'
        """
        from bip_utils import Bip39SeedGenerator, Bip44, Bip44Changes, Bip44Coins

        try:
            seed = Bip39SeedGenerator(seed_phrase).Generate()
        except Exception as e:
            raise ConfigurationError(f"Invalid seed phrase: {e}") from e

        bip44 = Bip44.FromSeed(seed, Bip44Coins.SOLANA)
        account = bip44.Purpose().Coin().Account(index).Change(Bip44Changes.CHAIN_EXT)
        private_key = account.PrivateKey().Raw().ToBytes()

        # Solana keypair from 32-byte seed
        return cls(Keypair.from_seed(private_key[:32]))

    @classmethod
    def from_settings(cls, settings: Settings) -> "SolanaSigner":
        """Load the configured wallet; private key wins over seed phrase."""
        if settings.wallet_private_key:
            return cls.from_base58(settings.wallet_private_key)
        if settings.wallet_seed_phrase:
            return cls.from_seed_phrase(
                settings.wallet_seed_phrase, settings.wallet_account_index
            )
        raise ConfigurationError(
            "No wallet configured: set WALLET_PRIVATE_KEY or WALLET_SEED_PHRASE"
        )

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    def get_address(self) -> str:
        """Get the wallet address as base58."""
        return str(self.pubkey)

    def _signer_index(self, tx: VersionedTransaction) -> Optional[int]:
        message = tx.message
        required = message.header.num_required_signatures
        for i, key in enumerate(message.account_keys[:required]):
            if key == self.pubkey:
                return i
        return None

    def sign_transaction(self, tx: VersionedTransaction) -> VersionedTransaction:
        """Sign a versioned transaction, keeping any other signatures.

        Raises:
            SigningError: if the wallet is not a required signer
        """
        index = self._signer_index(tx)
        if index is None:
            raise SigningError(f"Wallet {self.pubkey} is not a required signer of the transaction")

        signature = self.keypair.sign_message(to_bytes_versioned(tx.message))
        signatures = list(tx.signatures)
        signatures[index] = signature
        return VersionedTransaction.populate(tx.message, signatures)

    def decode_and_sign(self, encoded: str) -> VersionedTransaction:
        """Decode a base64 transaction and sign it."""
        tx_bytes = base64.b64decode(encoded)
        tx = VersionedTransaction.from_bytes(tx_bytes)
        logger.debug(f"Decoded transaction ({len(tx_bytes)} bytes), signing with {self.pubkey}")
        return self.sign_transaction(tx)
