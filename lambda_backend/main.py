"""
Lambda Gateway - serves configured endpoints through Lambda or HTTP backends

Each endpoint of routing.yml is bound to its first backend. Backends with a
Lambda extra config invoke the configured function; the others are proxied
to their HTTP origin.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

import httpx
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request as HttpRequest
from fastapi.responses import JSONResponse

from .config import AdapterConfig, config as default_config
from .core.backend import backend_factory
from .core.exceptions import (
    LambdaBackendError,
    aws_exception_handler,
    global_exception_handler,
    lambda_backend_exception_handler,
    timeout_exception_handler,
    transport_exception_handler,
)
from .core.logging_config import setup_logging
from .core.options import ConnectionOptions
from .middleware import request_id_middleware
from .models.request import EndpointConfig, Proxy, Request, Response
from .routing import load_endpoints
from .services.http_backend import http_backend_factory
from .services.http_client import HttpClientFactory
from .services.invoker import InvokerFactory, LambdaInvoker, invoker_factory

logger = logging.getLogger("lambda_backend.main")

# Describe the origin payload, not the re-encoded JSON body.
_PAYLOAD_HEADERS = {"content-length", "content-encoding", "transfer-encoding"}


def canonical_header_key(key: str) -> str:
    """user-agent -> User-Agent"""
    return "-".join(part.capitalize() for part in key.split("-"))


def to_backend_request(request: HttpRequest) -> Request:
    """
    Convert a Starlette request into a backend Request.

    The body is passed as the request stream, so it is read only by the
    backend that needs it.
    """
    headers: Dict[str, List[str]] = {}
    for key, value in request.headers.items():
        headers.setdefault(canonical_header_key(key), []).append(value)

    query: Dict[str, List[str]] = {}
    for key, value in request.query_params.multi_items():
        query.setdefault(key, []).append(value)

    return Request(
        method=request.method,
        path=request.url.path,
        params={key: str(value) for key, value in request.path_params.items()},
        query=query,
        headers=headers,
        body=request.stream(),
        url=httpx.URL(str(request.url)),
    )


def to_http_response(response: Response) -> JSONResponse:
    headers = {
        key: ", ".join(values)
        for key, values in response.metadata.headers.items()
        if key.lower() not in _PAYLOAD_HEADERS
    }
    return JSONResponse(
        content=response.data,
        status_code=response.metadata.status_code,
        headers=headers,
    )


def _endpoint_handler(proxy: Proxy, timeout: float):
    async def handler(request: HttpRequest) -> JSONResponse:
        response = await asyncio.wait_for(proxy(to_backend_request(request)), timeout=timeout)
        return to_http_response(response)

    return handler


def create_app(
    config: AdapterConfig = default_config,
    endpoints: Optional[List[EndpointConfig]] = None,
    invokers: Optional[InvokerFactory] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Assemble the gateway application.

    Args:
        config: adapter configuration
        endpoints: endpoints to serve (default: loaded from ROUTING_CONFIG_PATH)
        invokers: invoker factory override
        client: httpx client for the HTTP origin backend
    """
    if endpoints is None:
        endpoints = load_endpoints(config.ROUTING_CONFIG_PATH)
    if client is None:
        client = HttpClientFactory(config).create_async_client(timeout=config.BACKEND_TIMEOUT)

    created_invokers: List[LambdaInvoker] = []

    def tracked_invoker_factory(connection: Optional[ConnectionOptions]) -> LambdaInvoker:
        invoker = invoker_factory(connection, config)
        created_invokers.append(invoker)
        return invoker

    factory = backend_factory(
        http_backend_factory(client), invoker_factory=invokers or tracked_invoker_factory
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        logger.info(f"Gateway serving {len(app.state.endpoints)} endpoints")
        yield
        logger.info("Gateway shutting down...")
        for invoker in created_invokers:
            invoker.close()
        await client.aclose()

    app = FastAPI(title="Lambda Gateway", lifespan=lifespan)
    app.state.endpoints = []

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(LambdaBackendError, lambda_backend_exception_handler)
    app.add_exception_handler(httpx.HTTPError, transport_exception_handler)
    app.add_exception_handler(ClientError, aws_exception_handler)
    app.add_exception_handler(BotoCoreError, aws_exception_handler)
    app.add_exception_handler(TimeoutError, timeout_exception_handler)

    for endpoint in endpoints:
        if not endpoint.backend:
            logger.warning(f"Endpoint {endpoint.method} {endpoint.endpoint} has no backend")
            continue
        if len(endpoint.backend) > 1:
            logger.warning(
                f"Endpoint {endpoint.method} {endpoint.endpoint} defines "
                f"{len(endpoint.backend)} backends; only the first one is used"
            )

        proxy = factory(endpoint.backend[0])
        app.add_api_route(
            endpoint.endpoint,
            _endpoint_handler(proxy, config.LAMBDA_INVOKE_TIMEOUT),
            methods=[endpoint.method],
        )
        app.state.endpoints.append(endpoint)

    return app


def build_app() -> FastAPI:
    """Entry point for `uvicorn lambda_backend.main:build_app --factory`."""
    setup_logging(default_config.LOG_CONFIG_PATH, default_config.LOG_LEVEL)
    return create_app()
