"""Pytest configuration and fixtures."""

import base64
import json
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("WALLET_PRIVATE_KEY", None)
os.environ.pop("WALLET_SEED_PHRASE", None)

from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

from solagent.agent import SolanaAgent
from solagent.config import get_settings
from solagent.routing.jupiter import JupiterClient
from solagent.tokens import SOLANA_TOKENS

USDC = SOLANA_TOKENS["USDC"]
SOL = SOLANA_TOKENS["SOL"]


def make_quote_response(in_amount: str = "2500000", slippage_bps: int = 300) -> dict:
    """A Jupiter v6 quote response, trimmed to the fields we read."""
    return {
        "inputMint": USDC,
        "inAmount": in_amount,
        "outputMint": SOL,
        "outAmount": "16000000",
        "otherAmountThreshold": "15520000",
        "swapMode": "ExactIn",
        "slippageBps": slippage_bps,
        "priceImpactPct": "0.0001",
        "routePlan": [
            {
                "swapInfo": {
                    "ammKey": "Czfq3xZZDmsdGdUyrNLtRhGc47cXcZtLG4crryfu44zE",
                    "label": "Orca",
                    "inputMint": USDC,
                    "outputMint": SOL,
                },
                "percent": 100,
            }
        ],
        "contextSlot": 123456,
    }


def make_unsigned_transaction(payer: Pubkey) -> VersionedTransaction:
    """Compile a one-instruction v0 transaction with an empty signature slot."""
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=1000))
    message = MessageV0.try_compile(payer, [ix], [], Hash.default())
    return VersionedTransaction.populate(message, [Signature.default()])


def encode_transaction(tx: VersionedTransaction) -> str:
    return base64.b64encode(bytes(tx)).decode()


class FakeJupiterAPI:
    """Records requests and serves canned quote/swap responses."""

    def __init__(self, swap_transaction: str):
        self.requests: list[httpx.Request] = []
        self.quote_status = 200
        self.quote_body: object = make_quote_response()
        self.swap_status = 200
        self.swap_body: object = {"swapTransaction": swap_transaction, "lastValidBlockHeight": 1}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/quote"):
            return httpx.Response(self.quote_status, json=self.quote_body)
        if request.url.path.endswith("/swap"):
            return httpx.Response(self.swap_status, json=self.swap_body)
        return httpx.Response(404, json={"error": "not found"})

    @property
    def quote_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/quote")]

    @property
    def swap_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/swap")]

    def swap_payload(self, index: int = 0) -> dict:
        return json.loads(self.swap_requests[index].content)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def unsigned_tx(keypair) -> VersionedTransaction:
    return make_unsigned_transaction(keypair.pubkey())


@pytest.fixture
def jupiter_api(unsigned_tx) -> FakeJupiterAPI:
    return FakeJupiterAPI(encode_transaction(unsigned_tx))


@pytest.fixture
def jupiter(jupiter_api) -> JupiterClient:
    return JupiterClient(transport=httpx.MockTransport(jupiter_api.handler))


@pytest.fixture
def connection() -> AsyncMock:
    """Mock RPC connection; send_transaction echoes the wallet signature."""
    conn = AsyncMock()
    conn.send_transaction.side_effect = lambda tx, *args, **kwargs: SimpleNamespace(
        value=tx.signatures[0]
    )
    return conn


@pytest.fixture
def agent(keypair, connection, jupiter) -> SolanaAgent:
    return SolanaAgent(wallet=keypair, connection=connection, jupiter=jupiter)
