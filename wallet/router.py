from fastapi import APIRouter
from dishka.integrations.fastapi import inject
from dishka import FromComponent
from typing import Annotated
from wallet.entities import (
    ConnectionState,
    DeployContractRequest,
    OperationRequest,
    OperationResponse,
    SignPayloadRequest,
    SignPayloadResponse,
)
from wallet.provider import WalletConnectProvider
from wallet.schemas import (
    BalanceResponse,
    ConnectRequest,
    DisconnectResponse,
    GetBalanceRequest,
    StatusResponse,
)
from wallet.usecases import (
    ConnectWalletUseCase,
    DisconnectWalletUseCase,
    GetStatusUseCase,
    GetWalletBalanceUseCase,
)

router = APIRouter(
    prefix="/api/wallet",
    tags=["Wallet"]
)


@router.get("/status", response_model=StatusResponse)
@inject
async def get_status(
    use_case: Annotated[GetStatusUseCase, FromComponent("wallet")]
) -> StatusResponse:
    """
    Get connection status and selected chain.

    Returns
    -------
    StatusResponse
        Provider status
    """
    return await use_case()


@router.post("/connect", response_model=ConnectionState)
@inject
async def connect_wallet(
    request: ConnectRequest,
    use_case: Annotated[ConnectWalletUseCase, FromComponent("wallet")]
) -> ConnectionState:
    """
    Start wallet pairing and wait for the connected account.

    Parameters
    ----------
    request : ConnectRequest
        Optional address hint
    use_case : ConnectWalletUseCase
        Use case for connecting the wallet

    Returns
    -------
    ConnectionState
        Connected account
    """
    return await use_case(wallet_address=request.wallet_address)


@router.post("/disconnect", response_model=DisconnectResponse)
@inject
async def disconnect_wallet(
    use_case: Annotated[DisconnectWalletUseCase, FromComponent("wallet")]
) -> DisconnectResponse:
    return await use_case()


@router.post("/balance", response_model=BalanceResponse)
@inject
async def get_wallet_balance(
    request: GetBalanceRequest,
    use_case: Annotated[GetWalletBalanceUseCase, FromComponent("wallet")]
) -> BalanceResponse:
    """
    Get wallet balance on the selected chain.

    Parameters
    ----------
    request : GetBalanceRequest
        Request with wallet address
    use_case : GetWalletBalanceUseCase
        Use case for getting wallet balance

    Returns
    -------
    BalanceResponse
        Wallet balance information
    """
    return await use_case(wallet_address=request.wallet_address)


@router.post("/sign", response_model=SignPayloadResponse)
@inject
async def sign_payload(
    request: SignPayloadRequest,
    provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
) -> SignPayloadResponse:
    return await provider.request_sign_payload(request)


@router.post("/operation", response_model=OperationResponse)
@inject
async def request_operation(
    request: OperationRequest,
    provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
) -> OperationResponse:
    return await provider.request_operation(request)


@router.post("/deploy")
@inject
async def deploy_contract(
    request: DeployContractRequest,
    provider: Annotated[WalletConnectProvider, FromComponent("wallet")]
) -> None:
    await provider.deploy_contract(request)
