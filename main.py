from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from dishka.integrations.fastapi import setup_dishka

from core.container import create_container
from core.exception_handler import (
    validation_exception_handler,
    http_exception_handler,
    custom_exception_handler
)
from core.exceptions import BaseCustomException
from wallet.provider import WalletConnectProvider
from wallet.router import router as wallet_router

APP_NAME = "Etherlink Wallet Connect"
APP_VERSION = "0.1.0"


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """
    Build the wallet connect host application.

    The wallet provider is initialized on startup and shut down, together
    with the container, on exit.

    Parameters
    ----------
    container : AsyncContainer | None
        Dependency container, built from the environment when omitted

    Returns
    -------
    FastAPI
        Application instance
    """
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        provider = await container.get(WalletConnectProvider, component="wallet")
        await provider.initialize()
        yield
        await container.close()

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="Wallet connection service for Etherlink",
        lifespan=lifespan,
    )

    setup_dishka(container, app)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BaseCustomException, custom_exception_handler)
    app.add_exception_handler(Exception, custom_exception_handler)

    app.include_router(wallet_router)

    @app.get("/")
    async def root():
        """
        Root endpoint.

        Returns
        -------
        dict
            Application information
        """
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "endpoints": {
                "status": "/api/wallet/status",
                "connect": "/api/wallet/connect",
                "disconnect": "/api/wallet/disconnect",
                "balance": "/api/wallet/balance",
                "sign": "/api/wallet/sign",
                "operation": "/api/wallet/operation",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": APP_VERSION}

    return app
