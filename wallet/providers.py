from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated, AsyncIterable
from core.environment.config import Settings
from wallet.provider import WalletConnectProvider
from wallet.sdk import LocalAccountSdk, WalletSdk
from wallet.usecases import (
    ConnectWalletUseCase,
    DisconnectWalletUseCase,
    GetStatusUseCase,
    GetWalletBalanceUseCase,
)
import logging


class WalletProvider(Provider):
    """
    Provider for wallet-related dependencies.

    Parameters
    ----------
    sdk : WalletSdk | None
        Ready-made SDK to use instead of the local account SDK
    """

    component = "wallet"

    def __init__(self, sdk: WalletSdk | None = None):
        super().__init__()
        self._sdk = sdk

    @provide(scope=Scope.APP)
    def get_sdk(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> WalletSdk:
        """
        Provide the embedded wallet SDK.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        WalletSdk
            Wallet SDK instance

        Raises
        ------
        ValueError
            If no SDK was given and no private key is configured
        """
        if self._sdk is not None:
            return self._sdk
        if not settings.private_key:
            raise ValueError("WALLET_PRIVATE_KEY is required for the local account SDK")
        return LocalAccountSdk(private_key=settings.private_key, logger=logger)

    @provide(scope=Scope.APP)
    async def get_wallet_connect_provider(
        self,
        sdk: Annotated[WalletSdk, FromComponent("wallet")],
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> AsyncIterable[WalletConnectProvider]:
        """
        Provide the wallet connect provider and shut it down with the container.

        Parameters
        ----------
        sdk : WalletSdk
            Wallet SDK instance
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Yields
        ------
        WalletConnectProvider
            Wallet provider instance, not yet initialized
        """
        provider = WalletConnectProvider(sdk=sdk, settings=settings, logger=logger)
        try:
            yield provider
        finally:
            await provider.shutdown()

    @provide(scope=Scope.REQUEST)
    def get_status_use_case(
        self,
        provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
    ) -> GetStatusUseCase:
        return GetStatusUseCase(provider=provider)

    @provide(scope=Scope.REQUEST)
    def get_connect_use_case(
        self,
        provider: Annotated[WalletConnectProvider, FromComponent("wallet")],
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> ConnectWalletUseCase:
        return ConnectWalletUseCase(provider=provider, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_disconnect_use_case(
        self,
        provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
    ) -> DisconnectWalletUseCase:
        return DisconnectWalletUseCase(provider=provider)

    @provide(scope=Scope.REQUEST)
    def get_wallet_balance_use_case(
        self,
        provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
    ) -> GetWalletBalanceUseCase:
        """
        Provide get wallet balance use case.

        Parameters
        ----------
        provider : WalletConnectProvider
            Wallet provider instance

        Returns
        -------
        GetWalletBalanceUseCase
            Get wallet balance use case
        """
        return GetWalletBalanceUseCase(provider=provider)
