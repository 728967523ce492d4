from pydantic import BaseModel, ConfigDict, Field, field_validator

from wallet.entities import ChainDescriptor, ConnectionState


class JsonRpcPayload(BaseModel):
    """
    JSON-RPC request body for a balance lookup.

    Attributes
    ----------
    jsonrpc : str
        Protocol version
    method : str
        RPC method
    params : list[str]
        Method parameters (the wallet address)
    id : int
        Request id
    """
    jsonrpc: str = "2.0"
    method: str = "eth_getBalance"
    params: list[str]
    id: int = 1


class JsonRpcResponse(BaseModel):
    """
    JSON-RPC response body.

    ``result`` stays a raw string; parsing it is the balance source's job.
    """
    jsonrpc: str | None = None
    result: str | None = None
    id: int | None = None

    model_config = ConfigDict(extra="ignore")


class ConnectRequest(BaseModel):
    """
    Request schema for starting a wallet connection.

    Attributes
    ----------
    wallet_address : str | None
        Address hint to pre-fill the connection record with
    """
    wallet_address: str | None = Field(default=None, description="Optional address hint")


class StatusResponse(BaseModel):
    """
    Response schema for provider status.

    Attributes
    ----------
    connected : bool
        SDK account-connected flag
    connection : ConnectionState | None
        Current connection record
    chain : ChainDescriptor
        Selected chain
    """
    connected: bool
    connection: ConnectionState | None
    chain: ChainDescriptor


class DisconnectResponse(BaseModel):
    success: bool


class GetBalanceRequest(BaseModel):
    """
    Request schema for getting wallet balance.

    Attributes
    ----------
    wallet_address : str
        Wallet address to check balance for
    """
    wallet_address: str = Field(..., description="Wallet address to check balance for")

    @field_validator('wallet_address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        if not v.startswith('0x') or len(v) != 42:
            raise ValueError('Invalid EVM address format')
        return v


class BalanceResponse(BaseModel):
    """
    Response schema for balance query.

    Attributes
    ----------
    wallet_address : str
        Wallet address
    balance : str
        Truncated decimal balance, empty when unavailable
    chain_id : str
        Chain the balance was read on
    """
    wallet_address: str
    balance: str
    chain_id: str
