import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.exceptions import BalanceParseException
from wallet.balance import RpcBalanceSource, SdkBalanceSource, parse_hex_balance
from wallet.chains import ETHERLINK_TESTNET
from wallet.schemas import JsonRpcPayload


ADDRESS = "0x0000000000000000000000000000000000000001"


class TestParseHexBalance:
    """
    Tests for hex balance parsing and truncation.
    """

    def test_truncates_decimal_rendering(self):
        # 0x1e8480 == 2000000
        assert parse_hex_balance("0x1e8480") == "200000"

    def test_truncates_instead_of_rounding(self):
        # 0xf423f == 999999, 0x98967f == 9999999
        assert parse_hex_balance("0xf423f") == "999999"
        assert parse_hex_balance("0x98967f") == "999999"

    def test_large_wei_balance(self):
        # 1.5 XTZ in wei
        assert parse_hex_balance(hex(1_500_000_000_000_000_000)) == "150000"

    @pytest.mark.parametrize("result", [None, "", "0x", "0x0", "0x1", "0xzz", "0x12g4567"])
    def test_unparseable_results_raise(self, result):
        with pytest.raises(BalanceParseException):
            parse_hex_balance(result)


class TestRpcBalanceSource:
    """
    Tests for the JSON-RPC balance source.
    """

    @pytest.fixture
    def source(self):
        return RpcBalanceSource(ETHERLINK_TESTNET, timeout_seconds=5, logger=logging.getLogger("test"))

    def test_payload_shape(self):
        payload = JsonRpcPayload(params=[ADDRESS])
        assert payload.model_dump() == {
            "jsonrpc": "2.0",
            "method": "eth_getBalance",
            "params": [ADDRESS],
            "id": 1,
        }

    @pytest.mark.asyncio
    async def test_get_balance_parses_result(self, source):
        body = {"jsonrpc": "2.0", "result": "0x1e8480", "id": 1}
        with patch.object(source, "_post", AsyncMock(return_value=body)) as post:
            assert await source.get_balance(ADDRESS) == "200000"
        post.assert_awaited_once_with(JsonRpcPayload(params=[ADDRESS]))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", [None, "", "0x", "0x1", "garbage"])
    async def test_get_balance_returns_empty_on_bad_result(self, source, result, caplog):
        body = {"jsonrpc": "2.0", "result": result, "id": 1}
        with patch.object(source, "_post", AsyncMock(return_value=body)):
            with caplog.at_level(logging.WARNING, logger="test"):
                assert await source.get_balance(ADDRESS) == ""
        assert "Failed to parse balance string" in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"jsonrpc": "2.0", "result": 0, "id": 1},
        {"jsonrpc": "2.0", "result": {"balance": "0x1"}, "id": 1},
        {"jsonrpc": "2.0", "result": "0x1e8480", "id": "abc"},
        ["not", "an", "object"],
    ])
    async def test_get_balance_returns_empty_on_malformed_body(self, source, body, caplog):
        with patch.object(source, "_post", AsyncMock(return_value=body)):
            with caplog.at_level(logging.WARNING, logger="test"):
                assert await source.get_balance(ADDRESS) == ""
        assert "Malformed RPC response" in caplog.text

    @pytest.mark.asyncio
    async def test_get_balance_propagates_transport_errors(self, source):
        with patch.object(source, "_post", AsyncMock(side_effect=ConnectionError("down"))):
            with pytest.raises(ConnectionError):
                await source.get_balance(ADDRESS)

    @pytest.mark.asyncio
    async def test_post_sends_json_rpc_to_chain_url(self, source):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json = AsyncMock(return_value={"jsonrpc": "2.0", "result": "0x1e8480", "id": 1})
        post_ctx = MagicMock()
        post_ctx.__aenter__ = AsyncMock(return_value=response)
        post_ctx.__aexit__ = AsyncMock(return_value=False)

        session = MagicMock()
        session.post = MagicMock(return_value=post_ctx)
        session_ctx = MagicMock()
        session_ctx.__aenter__ = AsyncMock(return_value=session)
        session_ctx.__aexit__ = AsyncMock(return_value=False)

        with patch("wallet.balance.aiohttp.ClientSession", return_value=session_ctx) as session_cls:
            body = await source._post(JsonRpcPayload(params=[ADDRESS]))

        assert body["result"] == "0x1e8480"
        assert session_cls.call_args.kwargs["timeout"].total == 5
        session.post.assert_called_once_with(
            ETHERLINK_TESTNET.rpc_url,
            json={"jsonrpc": "2.0", "method": "eth_getBalance", "params": [ADDRESS], "id": 1}
        )


class TestSdkBalanceSource:

    @pytest.mark.asyncio
    async def test_reads_cached_balance(self, fake_sdk):
        fake_sdk.balance = "3.25"
        assert await SdkBalanceSource(fake_sdk).get_balance(ADDRESS) == "3.25"
