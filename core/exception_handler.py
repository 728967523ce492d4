import logging

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

from core.exceptions import BaseCustomException

logger = logging.getLogger("wallet_connect")


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """
    Build the JSON error body shared by every handler.

    Parameters
    ----------
    status_code : int
        HTTP status code
    message : str
        Error message or message key
    **extra
        Additional body fields

    Returns
    -------
    JSONResponse
        Error response
    """
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, **extra}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation errors.

    Parameters
    ----------
    request : Request
        FastAPI request
    exc : RequestValidationError
        Validation error

    Returns
    -------
    JSONResponse
        Error response listing each invalid field
    """
    errors = []
    for error in exc.errors():
        field_path = ".".join(
            str(x) for x in error["loc"] if not isinstance(x, int) and x != "body"
        )
        errors.append({
            "field": field_path or "body",
            "message": error["msg"],
            "type": error["type"]
        })

    return error_response(422, "Validation error", errors=errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, exc.detail)


async def custom_exception_handler(request: Request, exc: Exception):
    """
    Handler for wallet exceptions and anything unhandled.

    Parameters
    ----------
    request : Request
        FastAPI request
    exc : Exception
        Exception

    Returns
    -------
    JSONResponse
        Error response; unknown exceptions become a 500 and are logged
    """
    if isinstance(exc, BaseCustomException):
        return error_response(exc.get_status_code(), exc.message)

    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, "Internal server error")
