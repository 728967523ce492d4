from enum import Enum

from pydantic import BaseModel, ConfigDict


class WalletType(str, Enum):
    """Kind of wallet a connection was made through."""
    WALLETCONNECT = "WALLETCONNECT"


class Currency(BaseModel):
    """
    Native currency of a chain.

    Attributes
    ----------
    name : str
        Currency name
    symbol : str
        Ticker symbol
    decimals : int
        Number of decimals the wallet displays
    """
    name: str
    symbol: str
    decimals: int

    model_config = ConfigDict(frozen=True)


class BlockExplorer(BaseModel):
    """
    Block explorer of a chain.

    Attributes
    ----------
    name : str
        Explorer display name
    url : str
        Explorer base URL
    """
    name: str
    url: str

    model_config = ConfigDict(frozen=True)


class ChainDescriptor(BaseModel):
    """
    Entity describing a supported chain and its RPC endpoint.

    Attributes
    ----------
    chain_namespace : str
        Chain namespace (``eip155`` for EVM chains)
    chain_id : str
        Chain id inside the namespace
    name : str
        Display name
    native_currency : Currency
        Native currency of the chain
    block_explorer : BlockExplorer
        Block explorer of the chain
    rpc_url : str
        JSON-RPC endpoint
    is_testnet : bool
        Whether the chain is a test network
    image_url : str
        Chain icon
    short_id : str
        Short chain identifier used by the wallet UI
    """
    chain_namespace: str
    chain_id: str
    name: str
    native_currency: Currency
    block_explorer: BlockExplorer
    rpc_url: str
    is_testnet: bool
    image_url: str
    short_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def chain_reference(self) -> str:
        """CAIP-2 chain reference, e.g. ``eip155:42793``."""
        return f"{self.chain_namespace}:{self.chain_id}"


class ProviderMetadata(BaseModel):
    """
    Connection metadata the wallet shows while pairing.

    Attributes
    ----------
    project_id : str
        WalletConnect cloud project id
    name : str
        Application name
    description : str
        Application description
    url : str
        Application URL
    icon_url : str
        Application icon URL
    """
    project_id: str
    name: str
    description: str
    url: str
    icon_url: str

    model_config = ConfigDict(frozen=True)


class ConnectionState(BaseModel):
    """
    Entity representing the currently linked wallet account.

    Attributes
    ----------
    wallet_address : str | None
        Connected account address
    public_key : str | None
        Account id reported by the SDK
    wallet_type : WalletType | None
        Kind of wallet the account was connected through
    connected : bool
        Whether the account is linked
    """
    wallet_address: str | None = None
    public_key: str | None = None
    wallet_type: WalletType | None = None
    connected: bool = False

    model_config = ConfigDict(from_attributes=True)


class SdkAccount(BaseModel):
    """Account record handed back by the wallet SDK."""
    address: str
    account_id: str
    chain_id: str

    model_config = ConfigDict(frozen=True)


class SignPayloadRequest(BaseModel):
    payload: str


class SignPayloadResponse(BaseModel):
    signature: str


class OperationRequest(BaseModel):
    """
    Chain write request.

    Attributes
    ----------
    destination : str
        Contract or recipient address
    amount : str
        Native amount as a base-10 integer string (smallest unit)
    entrypoint : str | None
        Contract method to call
    arg : str | None
        Call arguments (JSON) or raw transaction data
    abi : str | None
        Contract ABI as JSON
    """
    destination: str
    amount: str = "0"
    entrypoint: str | None = None
    arg: str | None = None
    abi: str | None = None


class OperationResponse(BaseModel):
    transaction_hash: str


class DeployContractRequest(BaseModel):
    script: str
    initial_balance: str = "0"
