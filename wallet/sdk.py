import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from eth_account import Account
from eth_account.messages import encode_defunct
from pydantic import BaseModel
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from core.exceptions import WalletNotConnectedException
from wallet.entities import ChainDescriptor, ProviderMetadata, SdkAccount
from wallet.events import EventHook


class SdkConfig(BaseModel):
    """
    Parameters the wallet SDK is initialized with.

    Attributes
    ----------
    project_id : str
        WalletConnect cloud project id
    metadata : ProviderMetadata
        Application metadata shown in the wallet
    supported_chains : list[ChainDescriptor]
        Chains the SDK may connect to, active chain first
    """
    project_id: str
    metadata: ProviderMetadata
    supported_chains: list[ChainDescriptor]


class AccountConnectedEvent:
    """
    Payload of the SDK account-connected notification.

    The account record is not part of the payload itself; it is fetched on
    demand and the fetch may suspend.
    """

    def __init__(self, fetch_account: Callable[[], Awaitable[SdkAccount]]):
        self._fetch_account = fetch_account

    async def get_account(self) -> SdkAccount:
        return await self._fetch_account()


class WalletSdk(ABC):
    """
    Embedded wallet SDK the provider drives.

    Implementations own the pairing/session protocol and chain plumbing and
    report account changes through the three event hooks.
    """

    def __init__(self):
        self.account_connected = EventHook("account_connected")
        self.account_disconnected = EventHook("account_disconnected")
        self.account_changed = EventHook("account_changed")

    @property
    @abstractmethod
    def version(self) -> str: ...

    @property
    @abstractmethod
    def is_account_connected(self) -> bool: ...

    @property
    @abstractmethod
    def account_balance(self) -> str:
        """Locally cached balance of the connected account."""

    @abstractmethod
    async def initialize(self, config: SdkConfig) -> None: ...

    @abstractmethod
    async def try_resume_session(self) -> bool:
        """Restore a previous session if one exists. Returns whether one was restored."""

    @abstractmethod
    async def open_modal(self) -> None:
        """Start the pairing flow. Completion is reported via ``account_connected``."""

    @abstractmethod
    async def disconnect(self) -> None:
        """End the session. Completion is reported via ``account_disconnected``."""

    @abstractmethod
    async def sign_message(self, message: str) -> str: ...

    @abstractmethod
    async def write_contract(self, address: str, abi: Any, method: str, *args: Any) -> str: ...

    @abstractmethod
    async def send_transaction(self, address: str, value: int, data: str | None = None) -> str: ...

    async def close(self) -> None:
        """Release SDK resources."""


class LocalAccountSdk(WalletSdk):
    """
    Headless wallet SDK backed by a local private key.

    Pairing is immediate: ``open_modal`` links the key's account and raises
    ``account_connected``. Transactions are signed locally and broadcast
    through the active chain's RPC endpoint.

    Parameters
    ----------
    private_key : str
        Hex private key, with or without ``0x``
    logger : logging.Logger
        Logger instance
    """

    VERSION = "local-account-1.0"

    def __init__(self, private_key: str, logger: logging.Logger):
        super().__init__()
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        self._private_key = private_key
        self._account = Account.from_key(private_key)
        self.logger = logger
        self._config: SdkConfig | None = None
        self._web3: AsyncWeb3 | None = None
        self._connected = False
        self._balance = ""

    @property
    def version(self) -> str:
        return self.VERSION

    @property
    def is_account_connected(self) -> bool:
        return self._connected

    @property
    def account_balance(self) -> str:
        return self._balance

    @property
    def active_chain(self) -> ChainDescriptor:
        return self._config.supported_chains[0]

    async def initialize(self, config: SdkConfig) -> None:
        self._config = config
        self._web3 = AsyncWeb3(AsyncHTTPProvider(self.active_chain.rpc_url))
        self.logger.info(
            f"Local account SDK initialized for {self.active_chain.name} "
            f"({len(config.supported_chains)} chains registered)"
        )

    async def try_resume_session(self) -> bool:
        # nothing is persisted between runs
        return False

    async def open_modal(self) -> None:
        self._connected = True
        await self._refresh_balance()
        await self.account_connected.emit(AccountConnectedEvent(self._get_account))

    async def disconnect(self) -> None:
        self._connected = False
        self._balance = ""
        await self.account_disconnected.emit()

    async def sign_message(self, message: str) -> str:
        self._require_connected()
        signable = encode_defunct(text=message)
        signed = Account.sign_message(signable, private_key=self._private_key)
        return Web3.to_hex(signed.signature)

    async def write_contract(self, address: str, abi: Any, method: str, *args: Any) -> str:
        self._require_connected()
        contract = self._web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        function = getattr(contract.functions, method)
        tx = await function(*args).build_transaction(await self._base_transaction())
        return await self._sign_and_send(tx)

    async def send_transaction(self, address: str, value: int, data: str | None = None) -> str:
        self._require_connected()
        tx = await self._base_transaction()
        tx.update({
            "to": Web3.to_checksum_address(address),
            "value": value,
            "data": data or "0x",
        })
        tx["gas"] = await self._web3.eth.estimate_gas(tx)
        tx["gasPrice"] = await self._web3.eth.gas_price
        return await self._sign_and_send(tx)

    async def close(self) -> None:
        self._web3 = None
        self._connected = False

    async def _get_account(self) -> SdkAccount:
        return SdkAccount(
            address=self._account.address,
            account_id=f"{self.active_chain.chain_reference}:{self._account.address}",
            chain_id=self.active_chain.chain_reference
        )

    async def _refresh_balance(self) -> None:
        try:
            balance_wei = await self._web3.eth.get_balance(self._account.address)
            self._balance = str(self._web3.from_wei(balance_wei, "ether"))
        except Exception as e:
            self.logger.warning(f"Failed to refresh cached balance for {self._account.address}: {e}")

    async def _base_transaction(self) -> dict[str, Any]:
        return {
            "from": self._account.address,
            "nonce": await self._web3.eth.get_transaction_count(self._account.address),
            "chainId": int(self.active_chain.chain_id),
        }

    async def _sign_and_send(self, tx: dict[str, Any]) -> str:
        signed = self._web3.eth.account.sign_transaction(tx, private_key=self._private_key)
        tx_hash = await self._web3.eth.send_raw_transaction(signed.raw_transaction)
        self.logger.info(f"Transaction sent from {self._account.address}: {Web3.to_hex(tx_hash)}")
        return Web3.to_hex(tx_hash)

    def _require_connected(self) -> None:
        if not self._connected:
            raise WalletNotConnectedException()
