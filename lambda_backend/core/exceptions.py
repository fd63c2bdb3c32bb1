"""
Custom exception classes.

Represent errors related to route configuration and Lambda invocation.
"""

import logging
from typing import Optional, Union

import httpx
from botocore.exceptions import BotoCoreError, ClientError, ConnectTimeoutError, ReadTimeoutError
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LambdaBackendError(Exception):
    """Base exception class for the Lambda backend."""

    pass


class NoAdapterConfig(LambdaBackendError):
    """
    Raised when a route carries no Lambda configuration.

    This is a routing decision, not a failure: callers delegate to the
    fallback backend and never log it as an error.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"aws lambda: no extra config defined under {namespace}")


class MalformedAdapterConfig(LambdaBackendError):
    """Raised when the Lambda configuration block cannot be parsed."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"aws lambda: unable to parse the defined extra config: {detail}")


class BodyReadError(LambdaBackendError):
    """Raised when the inbound request body cannot be read."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"aws lambda: unable to read the request body: {cause}")


class BadStatusCode(LambdaBackendError):
    """Raised when the invocation status code is not exactly 200."""

    def __init__(self, status_code: Optional[int]):
        self.status_code = status_code
        super().__init__(f"aws lambda: bad status code: {status_code}")


class ResponseDecodeError(LambdaBackendError):
    """Raised when the function result is not a JSON object."""

    def __init__(self, function_name: str, cause: Optional[Exception] = None):
        self.function_name = function_name
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"aws lambda: invalid response payload from {function_name}{detail}")


# ===========================================
# Exception Handlers
# ===========================================


async def lambda_backend_exception_handler(request: Request, exc: LambdaBackendError):
    """
    Translate adapter errors into gateway responses.
    """
    if isinstance(exc, BodyReadError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, (BadStatusCode, ResponseDecodeError)):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.error(
        f"Lambda backend failed: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content={"message": "Lambda backend error", "detail": str(exc)},
    )


async def transport_exception_handler(request: Request, exc: httpx.HTTPError):
    """
    Handler for transport failures raised by httpx.
    """
    if isinstance(exc, httpx.TimeoutException):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    else:
        status_code = status.HTTP_502_BAD_GATEWAY

    logger.error(
        f"Backend transport failed: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_detail": str(exc),
        },
    )

    return JSONResponse(
        status_code=status_code,
        content={"message": "Bad Gateway", "detail": str(exc)},
    )


async def aws_exception_handler(request: Request, exc: Union[ClientError, BotoCoreError]):
    """
    Handler for Invoke API errors and SDK transport failures raised by botocore.
    """
    if isinstance(exc, (ConnectTimeoutError, ReadTimeoutError)):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    else:
        status_code = status.HTTP_502_BAD_GATEWAY

    extra = {
        "path": request.url.path,
        "method": request.method,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, ClientError):
        extra["error_code"] = exc.response.get("Error", {}).get("Code")

    logger.error(f"Lambda invocation failed: {exc}", extra=extra)

    return JSONResponse(
        status_code=status_code,
        content={"message": "Bad Gateway", "detail": str(exc)},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": str(exc)},
    )


async def timeout_exception_handler(request: Request, exc: TimeoutError):
    """
    Handler for requests exceeding the invocation timeout.
    """
    logger.error(
        f"Backend timed out: {request.method} {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={"message": "Gateway Timeout"},
    )
