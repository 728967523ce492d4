import asyncio

from core.environment.config import Settings
from core.exceptions import ConnectTimeoutException
from wallet.entities import ConnectionState
from wallet.provider import WalletConnectProvider
from wallet.schemas import BalanceResponse, DisconnectResponse, StatusResponse


class GetStatusUseCase:
    """
    Use case for reporting provider status.

    Parameters
    ----------
    provider : WalletConnectProvider
        Wallet provider instance
    """

    def __init__(self, provider: WalletConnectProvider):
        self.provider = provider

    async def __call__(self) -> StatusResponse:
        return StatusResponse(
            connected=self.provider.is_already_connected(),
            connection=self.provider.connection,
            chain=self.provider.selected_chain
        )


class ConnectWalletUseCase:
    """
    Use case for connecting a wallet with a bounded wait.

    The provider itself never times out a pairing, so the wait is capped
    here with ``connect_timeout_seconds``.

    Parameters
    ----------
    provider : WalletConnectProvider
        Wallet provider instance
    settings : Settings
        Application settings
    """

    def __init__(self, provider: WalletConnectProvider, settings: Settings):
        self.provider = provider
        self.settings = settings

    async def __call__(self, wallet_address: str | None = None) -> ConnectionState:
        """
        Execute use case.

        Parameters
        ----------
        wallet_address : str | None
            Address hint for the connection record

        Returns
        -------
        ConnectionState
            Populated connection record

        Raises
        ------
        ConnectTimeoutException
            If the wallet does not connect in time
        """
        try:
            return await asyncio.wait_for(
                self.provider.connect(ConnectionState(wallet_address=wallet_address)),
                timeout=self.settings.connect_timeout_seconds
            )
        except asyncio.TimeoutError:
            raise ConnectTimeoutException() from None


class DisconnectWalletUseCase:
    """
    Use case for ending the wallet session.

    Parameters
    ----------
    provider : WalletConnectProvider
        Wallet provider instance
    """

    def __init__(self, provider: WalletConnectProvider):
        self.provider = provider

    async def __call__(self) -> DisconnectResponse:
        return DisconnectResponse(success=await self.provider.disconnect())


class GetWalletBalanceUseCase:
    """
    Use case for getting wallet balance on the selected chain.

    Parameters
    ----------
    provider : WalletConnectProvider
        Wallet provider instance
    """

    def __init__(self, provider: WalletConnectProvider):
        self.provider = provider

    async def __call__(self, wallet_address: str) -> BalanceResponse:
        """
        Execute use case.

        Parameters
        ----------
        wallet_address : str
            Wallet address

        Returns
        -------
        BalanceResponse
            Balance response, with an empty balance when none could be read
        """
        balance = await self.provider.get_balance(wallet_address)
        return BalanceResponse(
            wallet_address=wallet_address,
            balance=balance,
            chain_id=self.provider.selected_chain.chain_id
        )
