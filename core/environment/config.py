import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.

    Attributes
    ----------
    network : str
        Target network identifier, ``testnet`` or ``mainnet``. Kept as a
        plain string so that an unknown value is reported by the provider
        at initialization instead of at settings load
    request_timeout_seconds : float
        Timeout for the balance JSON-RPC request
    connect_timeout_seconds : float
        Host-side bound on how long a connect request may wait for pairing
    project_id : str
        WalletConnect cloud project id
    app_name : str
        Application name shown in the wallet
    app_description : str
        Application description shown in the wallet
    app_url : str
        Application URL shown in the wallet
    app_icon_url : str
        Application icon shown in the wallet
    balance_source : Literal["rpc", "sdk"]
        Where balances come from: the chain RPC or the SDK's cached value
    write_mode : Literal["unsupported", "contract", "transfer"]
        How operation requests are carried out
    register_all_chains : bool
        Register both Etherlink chains with the SDK instead of only the selected one
    resume_session : bool
        Try to resume a previous wallet session after SDK initialization
    pending_policy : Literal["fan_out", "last_caller_wins"]
        How overlapping connect/disconnect requests are resolved
    private_key : str | None
        Key used by the headless local-account SDK
    log_level : str
        Root log level for the console handler
    """

    network: str = "testnet"
    request_timeout_seconds: float = 30
    connect_timeout_seconds: float = 120

    project_id: str = "e8fb22e1cf5233d73d6ea89c8d702562"
    app_name: str = "tezos-test"
    app_description: str = "Project Description"
    app_url: str = "https://example.com"
    app_icon_url: str = "https://example.com/logo.png"

    balance_source: Literal["rpc", "sdk"] = "rpc"
    write_mode: Literal["unsupported", "contract", "transfer"] = "unsupported"
    register_all_chains: bool = False
    resume_session: bool = True
    pending_policy: Literal["fan_out", "last_caller_wins"] = "fan_out"

    private_key: str | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        env_prefix="WALLET_",
        case_sensitive=False
    )
