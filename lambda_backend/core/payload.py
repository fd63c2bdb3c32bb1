"""
Invocation payload extraction.

Each PayloadFormat maps a gateway Request to the bytes sent to the function.
The format is chosen once per route by the configuration parser.
"""

import json
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from ..models.aws_v1 import APIGatewayProxyEvent, ApiGatewayIdentity, ApiGatewayRequestContext
from ..models.request import Request
from .exceptions import BodyReadError

PayloadExtractor = Callable[[Request], Awaitable[bytes]]


async def read_body(request: Request) -> bytes:
    """
    Read the whole request body.

    A missing body yields b"". Read failures raise BodyReadError.
    """
    body = request.body
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)

    chunks = []
    try:
        async for chunk in body:
            chunks.append(chunk)
    except Exception as e:
        raise BodyReadError(e) from e
    return b"".join(chunks)


def _single_values(values: Mapping[str, List[str]]) -> Dict[str, str]:
    return {key: items[0] for key, items in values.items() if items}


async def from_params(request: Request) -> bytes:
    """Encode the route parameters as a JSON object with lower-cased keys."""
    params = {key.lower(): value for key, value in request.params.items()}
    return (json.dumps(params, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")


async def from_body(request: Request) -> bytes:
    """Forward the raw request body."""
    return await read_body(request)


async def from_api_gateway_v1(request: Request) -> bytes:
    """Wrap the request in an API Gateway v1 proxy event."""
    body = await read_body(request)

    headers = _single_values(request.headers)
    event = APIGatewayProxyEvent(
        path=request.path,
        httpMethod=request.method,
        headers=headers,
        multiValueHeaders=request.headers or None,
        queryStringParameters=_single_values(request.query),
        multiValueQueryStringParameters=request.query or None,
        pathParameters=request.params or None,
        requestContext=ApiGatewayRequestContext(
            path=request.path,
            protocol=request.url.scheme,
            httpMethod=request.method,
            identity=ApiGatewayIdentity(userAgent=headers.get("User-Agent", "")),
        ),
        body=body.decode("utf-8", errors="replace"),
    )
    return event.model_dump_json(by_alias=True).encode("utf-8")


class PayloadFormat(str, Enum):
    """Supported invocation payload formats."""

    PARAMS = "params"
    BODY = "body"
    API_GATEWAY_V1 = "api_gateway_v1"

    @property
    def extractor(self) -> PayloadExtractor:
        return _EXTRACTORS[self]

    async def extract(self, request: Request) -> bytes:
        return await self.extractor(request)


_EXTRACTORS: Dict[PayloadFormat, PayloadExtractor] = {
    PayloadFormat.PARAMS: from_params,
    PayloadFormat.BODY: from_body,
    PayloadFormat.API_GATEWAY_V1: from_api_gateway_v1,
}


def select_payload_format(
    http_method: str, api_gateway_format: Optional[Mapping[str, Any]] = None
) -> PayloadFormat:
    """
    Pick the payload format for a route.

    The API Gateway format wins when explicitly enabled; otherwise GET routes
    send their parameters and every other method forwards the body.
    """
    if api_gateway_format is not None and api_gateway_format.get("enabled") is True:
        return PayloadFormat.API_GATEWAY_V1
    if http_method.upper() == "GET":
        return PayloadFormat.PARAMS
    return PayloadFormat.BODY
