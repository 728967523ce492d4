from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from core.environment.config import Settings
from core.environment.providers import EnvironmentProvider
from core.logging.providers import LoggerProvider
from wallet.providers import WalletProvider
from wallet.sdk import WalletSdk


def create_container(
    settings: Settings | None = None,
    sdk: WalletSdk | None = None
) -> AsyncContainer:
    """
    Build the application container.

    Parameters
    ----------
    settings : Settings | None
        Settings override, read from the environment when omitted
    sdk : WalletSdk | None
        SDK override, a local account SDK is built when omitted

    Returns
    -------
    AsyncContainer
        Dependency container
    """
    return make_async_container(
        FastapiProvider(),
        EnvironmentProvider(settings),
        LoggerProvider(),
        WalletProvider(sdk)
    )
