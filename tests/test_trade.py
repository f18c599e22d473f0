"""Tests for the Jupiter swap pipeline."""

from decimal import Decimal
from types import SimpleNamespace

import httpx
import pytest
from solders.message import to_bytes_versioned
from solders.pubkey import Pubkey

from solagent.exceptions import SwapError
from solagent.routing.base import SwapRequest
from solagent.routing.jupiter import JupiterClient
from solagent.swap.executor import SwapExecutor, trade
from solagent.swap.signer import SolanaSigner
from solagent.tokens import SOLANA_TOKENS, USDC_MINT

USDC = SOLANA_TOKENS["USDC"]
SOL = Pubkey.from_string(SOLANA_TOKENS["SOL"])


class TestTrade:
    """End-to-end tests for trade()."""

    @pytest.mark.asyncio
    async def test_successful_swap(self, agent, connection, jupiter_api, keypair, unsigned_tx):
        signature = await trade(agent, SOL, 2.5, USDC_MINT, 300, 6)

        # Quote request carries the truncated base-unit amount
        assert jupiter_api.quote_requests[0].url.params["amount"] == "2500000"
        assert jupiter_api.swap_payload()["userPublicKey"] == str(keypair.pubkey())

        connection.send_transaction.assert_awaited_once()
        submitted = connection.send_transaction.await_args.args[0]
        expected = keypair.sign_message(to_bytes_versioned(unsigned_tx.message))
        assert submitted.signatures[0] == expected
        assert signature == str(expected)

    @pytest.mark.asyncio
    async def test_defaults_to_usdc_input(self, agent, jupiter_api):
        await trade(agent, SOL, 10)

        params = jupiter_api.quote_requests[0].url.params
        assert params["inputMint"] == USDC
        assert params["amount"] == "10000000"
        assert params["slippageBps"] == "300"

    @pytest.mark.asyncio
    async def test_amount_truncated_not_rounded(self, agent, jupiter_api):
        await trade(agent, SOL, 1.9999999, USDC, 50, 6)

        assert jupiter_api.quote_requests[0].url.params["amount"] == "1999999"

    @pytest.mark.asyncio
    async def test_sol_input_uses_nine_decimals(self, agent, jupiter_api):
        await trade(agent, USDC, Decimal("0.05"), "SOL", 100, 9)

        params = jupiter_api.quote_requests[0].url.params
        assert params["inputMint"] == str(SOL)
        assert params["amount"] == "50000000"

    @pytest.mark.asyncio
    async def test_quote_failure(self, agent, connection, jupiter_api):
        jupiter_api.quote_status = 400
        jupiter_api.quote_body = {"error": "No routes found"}

        with pytest.raises(SwapError) as exc_info:
            await trade(agent, SOL, 2.5)

        assert str(exc_info.value).startswith("Swap failed: ")
        assert "No routes found" in str(exc_info.value)
        assert exc_info.value.step == "quote"
        assert jupiter_api.swap_requests == []
        connection.send_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_build_failure(self, agent, connection, jupiter_api):
        jupiter_api.swap_status = 500
        jupiter_api.swap_body = {"error": "upstream timeout"}

        with pytest.raises(SwapError) as exc_info:
            await trade(agent, SOL, 2.5)

        assert exc_info.value.step == "build"
        assert "upstream timeout" in exc_info.value.reason
        connection.send_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_network_failure(self, keypair, connection):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        agent = SimpleNamespace(
            connection=connection,
            wallet=keypair,
            wallet_address=keypair.pubkey(),
            jupiter=None,
        )
        client = JupiterClient(transport=httpx.MockTransport(refuse))

        with pytest.raises(SwapError, match="connection refused"):
            await trade(agent, SOL, 1, jupiter=client)

        connection.send_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deserialize_failure(self, agent, connection, jupiter_api):
        jupiter_api.swap_body = {"swapTransaction": "bm90IGEgdHJhbnNhY3Rpb24="}

        with pytest.raises(SwapError) as exc_info:
            await trade(agent, SOL, 2.5)

        assert exc_info.value.step == "sign"
        connection.send_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submit_failure(self, agent, connection):
        connection.send_transaction.side_effect = Exception("Blockhash not found")

        with pytest.raises(SwapError, match="Swap failed: Blockhash not found") as exc_info:
            await trade(agent, SOL, 2.5)

        assert exc_info.value.step == "submit"

    @pytest.mark.asyncio
    async def test_non_positive_amount(self, agent, jupiter_api):
        with pytest.raises(SwapError) as exc_info:
            await trade(agent, SOL, 0)

        assert exc_info.value.step == "prepare"
        assert jupiter_api.requests == []

    @pytest.mark.asyncio
    async def test_amount_below_one_base_unit(self, agent, jupiter_api):
        with pytest.raises(SwapError, match="below one base unit"):
            await trade(agent, SOL, 0.0000001, USDC, 300, 6)

        assert jupiter_api.requests == []

    @pytest.mark.asyncio
    async def test_invalid_mint(self, agent, jupiter_api):
        with pytest.raises(SwapError):
            await trade(agent, "not-a-mint", 1)

        assert jupiter_api.requests == []


class TestSwapExecutor:
    """Tests for the pipeline result object."""

    @pytest.mark.asyncio
    async def test_success_result(self, keypair, connection, jupiter):
        executor = SwapExecutor(connection, SolanaSigner(keypair), jupiter)
        request = SwapRequest(
            input_mint=USDC,
            output_mint=str(SOL),
            amount=Decimal("2.5"),
            slippage_bps=300,
            input_decimals=6,
        )

        result = await executor.execute(request)

        assert result.success is True
        assert result.error is None
        assert result.quote.out_amount == 16_000_000
        assert result.tx_signature is not None

    @pytest.mark.asyncio
    async def test_failure_result_does_not_raise(self, keypair, connection, jupiter, jupiter_api):
        jupiter_api.quote_status = 429
        jupiter_api.quote_body = {"error": "rate limited"}
        executor = SwapExecutor(connection, SolanaSigner(keypair), jupiter)
        request = SwapRequest(
            input_mint=USDC,
            output_mint=str(SOL),
            amount=Decimal("1"),
            slippage_bps=300,
            input_decimals=6,
        )

        result = await executor.execute(request)

        assert result.success is False
        assert result.failed_step == "quote"
        assert result.quote is None
        assert "rate limited" in result.error


class TestAgentTrade:
    """Tests for SolanaAgent.trade()."""

    @pytest.mark.asyncio
    async def test_uses_agent_default_slippage(self, agent, jupiter_api):
        agent.default_slippage_bps = 75

        await agent.trade(SOL, 5)

        assert jupiter_api.quote_requests[0].url.params["slippageBps"] == "75"

    @pytest.mark.asyncio
    async def test_explicit_slippage(self, agent, jupiter_api):
        await agent.trade(SOL, 5, slippage_bps=10)

        assert jupiter_api.quote_requests[0].url.params["slippageBps"] == "10"
