"""
Lambda backend factory.

Wraps a fallback backend factory: routes carrying a Lambda extra config are
served by invoking the configured function, every other route is handed to
the fallback unchanged.
"""

import base64
import binascii
import json
import logging
from typing import Any, Callable, Dict, Optional

from ..models.invocation import LOG_TYPE_TAIL, REQUEST_RESPONSE, InvocationInput, InvocationOutput
from ..models.request import BackendConfig, BackendFactory, Metadata, Proxy, Request, Response
from ..services.entity_formatter import EntityFormatter, new_entity_formatter
from ..services.invoker import InvokerFactory, invoker_factory as default_invoker_factory
from .exceptions import BadStatusCode, MalformedAdapterConfig, NoAdapterConfig, ResponseDecodeError
from .options import parse_options

logger = logging.getLogger("lambda_backend.backend")

EXECUTED_VERSION_HEADER = "X-Amz-Executed-Version"


def decode_result(function_name: str, result: InvocationOutput) -> Dict[str, Any]:
    """
    Validate the invocation result and decode its payload.

    Raises:
        BadStatusCode: status code missing or not exactly 200
        ResponseDecodeError: payload is not a JSON object
    """
    if result.status_code is None or result.status_code != 200:
        raise BadStatusCode(result.status_code)

    try:
        data = json.loads(result.payload)
    except ValueError as e:
        raise ResponseDecodeError(function_name, e) from e

    if not isinstance(data, dict):
        raise ResponseDecodeError(function_name)
    return data


def _log_tail(log_result: Optional[str]) -> Optional[str]:
    """Decode the base64 log tail returned with LogType=Tail."""
    if not log_result:
        return None
    try:
        return base64.b64decode(log_result).decode("utf-8", errors="replace")
    except binascii.Error:
        return log_result


def backend_factory(
    fallback: BackendFactory,
    invoker_factory: InvokerFactory = default_invoker_factory,
    formatter_factory: Callable[[BackendConfig], EntityFormatter] = new_entity_formatter,
) -> BackendFactory:
    """
    Build a backend factory serving Lambda routes.

    Args:
        fallback: factory used for routes without Lambda configuration
        invoker_factory: builds the route's Invoker from its connection options
        formatter_factory: builds the route's response entity formatter
    """

    def factory(remote: BackendConfig) -> Proxy:
        try:
            options = parse_options(remote)
        except NoAdapterConfig:
            return fallback(remote)
        except MalformedAdapterConfig as e:
            error = e
            logger.error(
                f"Invalid Lambda configuration for backend {remote.url_pattern}: {error.detail}",
                extra={"url_pattern": remote.url_pattern, "method": remote.method},
            )

            async def misconfigured(request: Request) -> Response:
                raise error

            return misconfigured

        invoker = invoker_factory(options.connection)
        formatter = formatter_factory(remote)

        async def proxy(request: Request) -> Response:
            function_name = options.function_resolver(request)
            payload = await options.payload_format.extract(request)

            result = await invoker.invoke(
                InvocationInput(
                    function_name=function_name,
                    payload=payload,
                    invocation_type=REQUEST_RESPONSE,
                    log_type=LOG_TYPE_TAIL,
                    qualifier=options.qualifier,
                )
            )

            logger.debug(
                f"Lambda {function_name} answered {result.status_code}",
                extra={
                    "function_name": function_name,
                    "status_code": result.status_code,
                    "executed_version": result.executed_version,
                    "function_error": result.function_error,
                    "log_tail": _log_tail(result.log_result),
                },
            )

            data = decode_result(function_name, result)

            headers = {}
            if result.executed_version is not None:
                headers[EXECUTED_VERSION_HEADER] = [result.executed_version]

            return formatter.format(
                Response(
                    data=data,
                    is_complete=True,
                    metadata=Metadata(status_code=result.status_code, headers=headers),
                )
            )

        return proxy

    return factory
