import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from core.exceptions import InvalidOperationRequestException, UnsupportedOperationException
from wallet.entities import OperationRequest, OperationResponse
from wallet.sdk import WalletSdk


class WriteCapability(ABC):
    """Strategy for carrying out chain write requests."""

    @abstractmethod
    async def request_operation(self, request: OperationRequest) -> OperationResponse:
        """
        Execute a write request.

        Parameters
        ----------
        request : OperationRequest
            Write request

        Returns
        -------
        OperationResponse
            Response carrying the transaction hash
        """


class UnsupportedWrite(WriteCapability):
    """Chain writes are not offered; callers go to the SDK directly."""

    async def request_operation(self, request: OperationRequest) -> OperationResponse:
        raise UnsupportedOperationException(
            "Request operation is not supported by wallet connect. Use the SDK EVM methods directly."
        )


class ContractWrite(WriteCapability):
    """
    Write request executed as a contract method call.

    Parameters
    ----------
    sdk : WalletSdk
        Wallet SDK
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, sdk: WalletSdk, logger: logging.Logger):
        self.sdk = sdk
        self.logger = logger

    async def request_operation(self, request: OperationRequest) -> OperationResponse:
        if not request.entrypoint:
            raise InvalidOperationRequestException("Contract write needs an entrypoint")
        if not request.abi:
            raise InvalidOperationRequestException("Contract write needs an ABI")

        try:
            abi = json.loads(request.abi)
        except json.JSONDecodeError as e:
            raise InvalidOperationRequestException(f"Contract ABI is not valid JSON: {e}") from e

        args = parse_call_arguments(request.arg)
        self.logger.info(f"Writing {request.entrypoint} on {request.destination} with {len(args)} args")
        tx_hash = await self.sdk.write_contract(request.destination, abi, request.entrypoint, *args)
        return OperationResponse(transaction_hash=tx_hash)


class NativeTransfer(WriteCapability):
    """
    Write request executed as a native currency transfer.

    Parameters
    ----------
    sdk : WalletSdk
        Wallet SDK
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, sdk: WalletSdk, logger: logging.Logger):
        self.sdk = sdk
        self.logger = logger

    async def request_operation(self, request: OperationRequest) -> OperationResponse:
        value = parse_amount(request.amount)
        self.logger.info(f"Transferring {value} to {request.destination}")
        tx_hash = await self.sdk.send_transaction(request.destination, value, request.arg)
        return OperationResponse(transaction_hash=tx_hash)


def parse_amount(amount: str) -> int:
    """
    Parse a base-10 integer amount of arbitrary size.

    Raises
    ------
    InvalidOperationRequestException
        If the amount is not a non-negative integer string
    """
    amount = amount.strip()
    if not (amount.isascii() and amount.isdigit()):
        raise InvalidOperationRequestException(f"Amount {amount!r} is not a non-negative integer")
    try:
        return int(amount)
    except ValueError as e:
        raise InvalidOperationRequestException(f"Amount {amount[:16]}... is too large") from e


def parse_call_arguments(arg: str | None) -> list[Any]:
    """Contract call arguments from a JSON array, a single JSON value, or a bare string."""
    if arg is None or arg == "":
        return []
    try:
        parsed = json.loads(arg)
    except json.JSONDecodeError:
        return [arg]
    return parsed if isinstance(parsed, list) else [parsed]
