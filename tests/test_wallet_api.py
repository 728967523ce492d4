from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from fakes import TEST_ADDRESS, FakeSdk, make_client, make_settings
from wallet.balance import RpcBalanceSource


class TestWalletAPI:
    """
    Tests for the wallet HTTP surface.

    These tests verify:
    1. Endpoints are reachable and return the expected structure
    2. Provider results and errors map to the right status codes
    3. Input validation rejects malformed requests

    The embedded SDK is a fake, so nothing touches a real wallet or chain.
    """

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Etherlink Wallet Connect"
        assert data["endpoints"]["balance"] == "/api/wallet/balance"
        assert data["endpoints"]["connect"] == "/api/wallet/connect"

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_status_before_connect(self, client: AsyncClient):
        response = await client.get("/api/wallet/status")
        assert response.status_code == 200
        data = response.json()
        assert data["connected"] is False
        assert data["connection"] is None
        assert data["chain"]["chain_id"] == "128123"
        assert data["chain"]["is_testnet"] is True

    @pytest.mark.asyncio
    async def test_connect_then_status(self, client: AsyncClient):
        response = await client.post("/api/wallet/connect", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["wallet_address"] == TEST_ADDRESS
        assert data["wallet_type"] == "WALLETCONNECT"
        assert data["connected"] is True

        status = (await client.get("/api/wallet/status")).json()
        assert status["connected"] is True
        assert status["connection"]["wallet_address"] == TEST_ADDRESS

    @pytest.mark.asyncio
    async def test_connect_timeout(self):
        settings = make_settings(connect_timeout_seconds=0.05)
        async with make_client(settings, FakeSdk(auto_connect=False)) as client:
            response = await client.post("/api/wallet/connect", json={})

        assert response.status_code == 408
        assert response.json() == {"status": "error", "message": "error.connect.timeout"}

    @pytest.mark.asyncio
    async def test_disconnect_without_account(self, client: AsyncClient, fake_sdk: FakeSdk):
        response = await client.post("/api/wallet/disconnect")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert fake_sdk.disconnect_calls == 0

    @pytest.mark.asyncio
    async def test_get_balance(self, client: AsyncClient):
        response = await client.post("/api/wallet/balance", json={"wallet_address": TEST_ADDRESS})
        assert response.status_code == 200
        assert response.json() == {
            "wallet_address": TEST_ADDRESS,
            "balance": "12.5",
            "chain_id": "128123",
        }

    @pytest.mark.asyncio
    async def test_get_balance_malformed_rpc_body(self):
        settings = make_settings(balance_source="rpc")
        body = {"jsonrpc": "2.0", "result": {"balance": "0x1"}, "id": 1}
        with patch.object(RpcBalanceSource, "_post", AsyncMock(return_value=body)):
            async with make_client(settings, FakeSdk()) as client:
                response = await client.post("/api/wallet/balance", json={"wallet_address": TEST_ADDRESS})

        assert response.status_code == 200
        assert response.json()["balance"] == ""

    @pytest.mark.asyncio
    async def test_get_balance_invalid_address_format(self, client: AsyncClient):
        response = await client.post("/api/wallet/balance", json={"wallet_address": "invalid_address"})
        assert response.status_code == 422
        data = response.json()
        assert data["message"] == "Validation error"
        assert data["errors"][0]["field"] == "wallet_address"

    @pytest.mark.asyncio
    async def test_get_balance_missing_required_field(self, client: AsyncClient):
        response = await client.post("/api/wallet/balance", json={})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_sign_payload(self, client: AsyncClient):
        response = await client.post("/api/wallet/sign", json={"payload": "hello"})
        assert response.status_code == 200
        assert response.json() == {"signature": "signed:hello"}

    @pytest.mark.asyncio
    async def test_operation_not_supported_by_default(self, client: AsyncClient):
        response = await client.post("/api/wallet/operation", json={"destination": TEST_ADDRESS})
        assert response.status_code == 501
        assert "not supported by wallet connect" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_operation_transfer(self):
        sdk = FakeSdk()
        settings = make_settings(write_mode="transfer")
        async with make_client(settings, sdk) as client:
            response = await client.post(
                "/api/wallet/operation",
                json={"destination": TEST_ADDRESS, "amount": "5"}
            )

        assert response.status_code == 200
        assert response.json() == {"transaction_hash": "0xtransfer"}
        assert sdk.transfers == [(TEST_ADDRESS, 5, None)]

    @pytest.mark.asyncio
    async def test_operation_transfer_invalid_amount(self):
        settings = make_settings(write_mode="transfer")
        async with make_client(settings, FakeSdk()) as client:
            response = await client.post(
                "/api/wallet/operation",
                json={"destination": TEST_ADDRESS, "amount": "1.5"}
            )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_deploy_contract_not_supported(self, client: AsyncClient):
        response = await client.post("/api/wallet/deploy", json={"script": "{}"})
        assert response.status_code == 501
        assert response.json()["message"].startswith("Contract origination is not supported")
