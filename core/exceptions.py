from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for all custom exceptions.
    """

    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        """
        Return default error message.

        Returns
        -------
        str
            Default error message
        """
        return "error.unknown"

    def get_status_code(self) -> int:
        """
        Return HTTP status code for exception.

        Returns
        -------
        int
            HTTP status code
        """
        return 500


class BadRequestException(BaseCustomException):
    """Bad request exception (400)."""

    def get_status_code(self) -> int:
        return 400


class UnsupportedNetworkException(BadRequestException):
    """Configured network has no Etherlink chain descriptor."""

    def get_default_message(self) -> str:
        return "error.network.not_supported"


class InvalidOperationRequestException(BadRequestException):
    """Operation request fields cannot be turned into a chain call."""

    def get_default_message(self) -> str:
        return "error.operation.invalid"


class UnsupportedOperationException(BaseCustomException):
    """Operation is not available through wallet connect (501)."""

    def get_default_message(self) -> str:
        return "error.operation.not_supported"

    def get_status_code(self) -> int:
        return 501


class ProviderNotInitializedException(BaseCustomException):
    """Provider used before initialize() completed (503)."""

    def get_default_message(self) -> str:
        return "error.provider.not_initialized"

    def get_status_code(self) -> int:
        return 503


class ConnectTimeoutException(BaseCustomException):
    """Wallet did not complete pairing in time (408)."""

    def get_default_message(self) -> str:
        return "error.connect.timeout"

    def get_status_code(self) -> int:
        return 408


class BalanceParseException(BaseCustomException):
    """RPC balance result could not be parsed. Never leaves the balance source."""

    def get_default_message(self) -> str:
        return "error.balance.parse_failed"


class WalletNotConnectedException(BaseCustomException):
    """Call needs a paired wallet account but none is connected (409)."""

    def get_default_message(self) -> str:
        return "error.wallet.not_connected"

    def get_status_code(self) -> int:
        return 409
