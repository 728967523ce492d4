import asyncio
import logging

from core.environment.config import Settings
from core.exceptions import ProviderNotInitializedException, UnsupportedOperationException
from wallet.balance import BalanceSource, RpcBalanceSource, SdkBalanceSource
from wallet.chains import select_chain, supported_chains
from wallet.entities import (
    ChainDescriptor,
    ConnectionState,
    DeployContractRequest,
    OperationRequest,
    OperationResponse,
    ProviderMetadata,
    SdkAccount,
    SignPayloadRequest,
    SignPayloadResponse,
    WalletType,
)
from wallet.events import EventHook
from wallet.operations import ContractWrite, NativeTransfer, UnsupportedWrite, WriteCapability
from wallet.sdk import AccountConnectedEvent, SdkConfig, WalletSdk


class WalletConnectProvider:
    """
    Wallet provider that drives an embedded wallet SDK on an Etherlink chain.

    SDK account notifications are turned into awaitable results for
    ``connect``/``disconnect`` and republished as the provider's own
    ``wallet_connected``/``wallet_disconnected`` events. The provider keeps a
    single ``ConnectionState`` which only the account handlers mutate.

    Parameters
    ----------
    sdk : WalletSdk
        Embedded wallet SDK, owned by the provider until ``shutdown``
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    balance_source : BalanceSource | None
        Balance strategy; chosen from ``settings.balance_source`` when omitted
    write_capability : WriteCapability | None
        Write strategy; chosen from ``settings.write_mode`` when omitted
    """

    wallet_type = WalletType.WALLETCONNECT

    def __init__(
        self,
        sdk: WalletSdk,
        settings: Settings,
        logger: logging.Logger,
        balance_source: BalanceSource | None = None,
        write_capability: WriteCapability | None = None
    ):
        self.sdk = sdk
        self.settings = settings
        self.logger = logger
        self.balance_source = balance_source
        self.write_capability = write_capability

        self.wallet_connected = EventHook("wallet_connected")
        self.wallet_disconnected = EventHook("wallet_disconnected")
        # kept for interface parity; pairing happens inside the SDK UI
        self.pairing_requested = EventHook("pairing_requested")

        self._selected_chain: ChainDescriptor | None = None
        self._connection: ConnectionState | None = None
        self._pending_connects: list[tuple[asyncio.Future, ConnectionState]] = []
        self._pending_disconnects: list[asyncio.Future] = []
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def selected_chain(self) -> ChainDescriptor:
        self._require_initialized()
        return self._selected_chain

    @property
    def connection(self) -> ConnectionState | None:
        return self._connection

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """
        Configure and start the SDK, then subscribe to its account events.

        Safe to call more than once. The network is resolved before the SDK is
        touched, so an unsupported network fails without side effects. There is
        no rollback when the SDK itself fails; the error propagates and the
        provider should be discarded.

        Raises
        ------
        UnsupportedNetworkException
            If the configured network is neither testnet nor mainnet
        """
        async with self._init_lock:
            if self._initialized:
                return

            chain = select_chain(self.settings.network)
            metadata = ProviderMetadata(
                project_id=self.settings.project_id,
                name=self.settings.app_name,
                description=self.settings.app_description,
                url=self.settings.app_url,
                icon_url=self.settings.app_icon_url
            )
            config = SdkConfig(
                project_id=metadata.project_id,
                metadata=metadata,
                supported_chains=supported_chains(chain, self.settings.register_all_chains)
            )

            await self.sdk.initialize(config)
            if self.settings.resume_session:
                resumed = await self.sdk.try_resume_session()
                self.logger.info(f"Wallet connect session resumed: {resumed}")

            self.logger.info(f"Wallet connect IsAccountConnected: {self.sdk.is_account_connected}")
            self.logger.info(f"Wallet SDK version: {self.sdk.version}")

            self.sdk.account_connected += self._on_account_connected
            self.sdk.account_disconnected += self._on_account_disconnected
            self.sdk.account_changed += self._on_account_changed

            self._selected_chain = chain
            if self.balance_source is None:
                self.balance_source = self._build_balance_source(chain)
            if self.write_capability is None:
                self.write_capability = self._build_write_capability()
            self._initialized = True

    async def shutdown(self) -> None:
        """Unsubscribe from the SDK, cancel outstanding requests and close the SDK."""
        if self._initialized:
            self.sdk.account_connected -= self._on_account_connected
            self.sdk.account_disconnected -= self._on_account_disconnected
            self.sdk.account_changed -= self._on_account_changed
            self._initialized = False

        for future, _ in self._pending_connects:
            future.cancel()
        for future in self._pending_disconnects:
            future.cancel()
        self._pending_connects = []
        self._pending_disconnects = []
        await self.sdk.close()

    async def connect(self, requested_state: ConnectionState | None = None) -> ConnectionState:
        """
        Open the wallet pairing flow and wait for an account.

        No timeout is applied here; the pairing may never finish if the user
        walks away, so callers bound the wait themselves. If the modal fails
        to open, the request is dropped and the current connection is left
        untouched.

        Parameters
        ----------
        requested_state : ConnectionState | None
            Record to populate with the connected account

        Returns
        -------
        ConnectionState
            Populated connection record
        """
        self._require_initialized()
        future = asyncio.get_running_loop().create_future()
        entry = (future, requested_state or ConnectionState())
        self._track(self._pending_connects, entry)
        try:
            await self.sdk.open_modal()
        except Exception:
            self._pending_connects = [
                pending for pending in self._pending_connects if pending[0] is not future
            ]
            future.cancel()
            raise
        return await future

    async def disconnect(self) -> bool:
        """
        End the wallet session.

        When no account is connected the disconnect notification is raised
        locally and the SDK is not called.

        Returns
        -------
        bool
            True once the session is gone
        """
        self._require_initialized()
        future = asyncio.get_running_loop().create_future()
        self._track(self._pending_disconnects, future)
        if not self.sdk.is_account_connected:
            await self._on_account_disconnected()
        else:
            await self.sdk.disconnect()
        return await future

    def is_already_connected(self) -> bool:
        return self.sdk.is_account_connected

    async def get_balance(self, address: str) -> str:
        self._require_initialized()
        return await self.balance_source.get_balance(address)

    async def request_sign_payload(self, request: SignPayloadRequest) -> SignPayloadResponse:
        self._require_initialized()
        signature = await self.sdk.sign_message(request.payload)
        return SignPayloadResponse(signature=signature)

    async def request_operation(self, request: OperationRequest) -> OperationResponse:
        self._require_initialized()
        return await self.write_capability.request_operation(request)

    async def deploy_contract(self, request: DeployContractRequest) -> None:
        raise UnsupportedOperationException(
            "Contract origination is not supported by wallet connect and only available in tezos."
        )

    request_contract_origination = deploy_contract

    async def _on_account_connected(self, event: AccountConnectedEvent) -> None:
        account = await event.get_account()

        pending, self._pending_connects = self._pending_connects, []
        # each caller gets its own record; the newest one becomes the live connection
        states = [state for _, state in pending] or [self._connection or ConnectionState()]
        for state in states:
            state.wallet_address = account.address
            state.public_key = account.account_id
            state.wallet_type = self.wallet_type
            state.connected = True
        self._connection = states[-1]

        await self.wallet_connected.emit(self._connection)
        for future, state in pending:
            if not future.done():
                future.set_result(state)

    async def _on_account_disconnected(self) -> None:
        self._connection = None
        await self.wallet_disconnected.emit()
        self._resolve(self._pending_disconnects, True)
        self._pending_disconnects = []

    def _on_account_changed(self, account: SdkAccount) -> None:
        self.logger.info(f"Account changed, address: {account.address} - chain id: {account.chain_id}")

    def _track(self, pending: list, entry) -> None:
        """
        Register a new pending request.

        Under ``last_caller_wins`` the new entry replaces any earlier one, and
        the earlier caller is never resolved.
        """
        if self.settings.pending_policy == "last_caller_wins":
            pending.clear()
        pending.append(entry)

    @staticmethod
    def _resolve(pending: list[asyncio.Future], result) -> None:
        for future in pending:
            if not future.done():
                future.set_result(result)

    def _build_balance_source(self, chain: ChainDescriptor) -> BalanceSource:
        if self.settings.balance_source == "sdk":
            return SdkBalanceSource(self.sdk)
        return RpcBalanceSource(chain, self.settings.request_timeout_seconds, self.logger)

    def _build_write_capability(self) -> WriteCapability:
        if self.settings.write_mode == "contract":
            return ContractWrite(self.sdk, self.logger)
        if self.settings.write_mode == "transfer":
            return NativeTransfer(self.sdk, self.logger)
        return UnsupportedWrite()

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise ProviderNotInitializedException()
