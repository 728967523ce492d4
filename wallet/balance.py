import logging
import string
from abc import ABC, abstractmethod

import aiohttp
from pydantic import ValidationError

from core.exceptions import BalanceParseException
from wallet.entities import ChainDescriptor
from wallet.schemas import JsonRpcPayload, JsonRpcResponse
from wallet.sdk import WalletSdk


BALANCE_DISPLAY_DIGITS = 6


def parse_hex_balance(result: str | None) -> str:
    """
    Turn an ``eth_getBalance`` result into the display amount.

    The two-character ``0x`` prefix is dropped, the remaining digits are read
    as an unsigned hex integer and its decimal rendering is cut (not rounded)
    to the first six characters.

    Parameters
    ----------
    result : str | None
        Raw RPC result

    Returns
    -------
    str
        First six decimal digits of the balance

    Raises
    ------
    BalanceParseException
        If the result is missing, not hex, or renders to fewer than six digits
    """
    if result is None:
        raise BalanceParseException("RPC result is empty")

    digits = result[2:]
    if not all(c in string.hexdigits for c in digits):
        raise BalanceParseException(f"RPC result {result!r} is not a hex integer")

    try:
        rendered = str(int("0" + digits, 16))
    except ValueError as e:
        # exceeds the interpreter's int-to-str digit limit
        raise BalanceParseException(f"RPC result {result!r} is too large") from e

    if len(rendered) < BALANCE_DISPLAY_DIGITS:
        raise BalanceParseException(
            f"Balance {rendered} is shorter than {BALANCE_DISPLAY_DIGITS} digits"
        )
    return rendered[:BALANCE_DISPLAY_DIGITS]


class BalanceSource(ABC):
    """Strategy for reading an account balance."""

    @abstractmethod
    async def get_balance(self, address: str) -> str:
        """
        Get display balance of an address.

        Parameters
        ----------
        address : str
            Wallet address

        Returns
        -------
        str
            Balance amount, possibly an empty string when unavailable
        """


class RpcBalanceSource(BalanceSource):
    """
    Balance lookup through the chain's JSON-RPC endpoint.

    Parameters
    ----------
    chain : ChainDescriptor
        Chain whose RPC URL is queried
    timeout_seconds : float
        Total request timeout
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, chain: ChainDescriptor, timeout_seconds: float, logger: logging.Logger):
        self.chain = chain
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.logger = logger

    async def get_balance(self, address: str) -> str:
        self.logger.info(f"Wallet connect provider getting balance for {address}")
        data = await self._post(JsonRpcPayload(params=[address]))

        balance = ""
        try:
            balance = parse_hex_balance(self._read_result(data))
        except BalanceParseException as e:
            self.logger.warning(f"Failed to parse balance string, probably no balance found. {e.message}")

        self.logger.info(f"Wallet connect {address} balance: {balance}")
        return balance

    @staticmethod
    def _read_result(data) -> str | None:
        try:
            return JsonRpcResponse.model_validate(data).result
        except ValidationError as e:
            raise BalanceParseException(f"Malformed RPC response: {e.error_count()} validation error(s)") from e

    async def _post(self, payload: JsonRpcPayload) -> dict:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(self.chain.rpc_url, json=payload.model_dump()) as response:
                response.raise_for_status()
                return await response.json(content_type=None)


class SdkBalanceSource(BalanceSource):
    """Balance read from the SDK's cached account balance. No network call."""

    def __init__(self, sdk: WalletSdk):
        self.sdk = sdk

    async def get_balance(self, address: str) -> str:
        return self.sdk.account_balance
