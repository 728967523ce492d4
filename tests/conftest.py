import logging

import pytest
import pytest_asyncio

from core.environment.config import Settings
from fakes import FakeSdk, make_client, make_settings
from wallet.provider import WalletConnectProvider


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("wallet_connect.tests")


@pytest.fixture
def fake_sdk() -> FakeSdk:
    return FakeSdk()


@pytest_asyncio.fixture
async def provider(fake_sdk, settings, logger):
    """
    Initialized provider on top of the fake SDK.

    Yields
    ------
    WalletConnectProvider
        Ready provider
    """
    provider = WalletConnectProvider(sdk=fake_sdk, settings=settings, logger=logger)
    await provider.initialize()
    yield provider
    await provider.shutdown()


@pytest_asyncio.fixture
async def client(settings, fake_sdk):
    """
    Fixture for async test client backed by the fake SDK.

    Yields
    ------
    AsyncClient
        Async HTTP client for testing
    """
    async with make_client(settings, fake_sdk) as ac:
        yield ac
