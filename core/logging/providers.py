import logging
import sys
from typing import Annotated

from dishka import FromComponent, Provider, Scope, provide

from core.environment.config import Settings


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LoggerProvider(Provider):
    """
    Provider for logging configuration and logger instances.

    Configures console (stdout) logging once, at the level from settings.
    """
    component = "logger"

    @provide(scope=Scope.APP)
    def get_logger(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> logging.Logger:
        """
        Provide configured logger instance.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        logging.Logger
            Wallet connect logger that writes to console
        """
        if not logging.getLogger().handlers:
            logging.basicConfig(
                level=settings.log_level.upper(),
                format=LOG_FORMAT,
                handlers=[
                    logging.StreamHandler(sys.stdout)
                ]
            )

        return logging.getLogger("wallet_connect")
