"""
HTTP origin backend.

Baseline backend used for routes without Lambda configuration: forwards the
request to the backend host and decodes the JSON answer.
"""

import logging
import re
from typing import Dict

import httpx

from ..core.payload import read_body
from ..models.request import BackendConfig, BackendFactory, Metadata, Proxy, Request, Response

logger = logging.getLogger("lambda_backend.http_backend")


_PARAM_PATTERN = re.compile(r"\{(\w+)\}")

# Hop-by-hop headers are not forwarded to the origin.
_SKIPPED_HEADERS = {"host", "content-length", "connection", "transfer-encoding"}


def render_url_pattern(url_pattern: str, params: Dict[str, str]) -> str:
    """
    Substitute {param} placeholders with the request parameters.

    Example: "/users/{id}" with {"id": "42"} -> "/users/42"
    """
    return _PARAM_PATTERN.sub(lambda m: params.get(m.group(1), m.group(0)), url_pattern)


def http_backend_factory(client: httpx.AsyncClient) -> BackendFactory:
    """Build the fallback backend factory on top of a shared client."""

    def factory(remote: BackendConfig) -> Proxy:
        if not remote.host:
            raise ValueError(f"Backend {remote.url_pattern!r} has no host defined")
        base_url = remote.host[0].rstrip("/")

        async def proxy(request: Request) -> Response:
            url = base_url + render_url_pattern(remote.url_pattern, request.params)
            headers = [
                (key, value)
                for key, values in request.headers.items()
                if key.lower() not in _SKIPPED_HEADERS
                for value in values
            ]
            body = await read_body(request)

            response = await client.request(
                remote.method,
                url,
                params=[(key, value) for key, values in request.query.items() for value in values],
                headers=headers,
                content=body or None,
            )
            response.raise_for_status()

            data = response.json() if response.content else {}
            if not isinstance(data, dict):
                data = {"collection": data}

            logger.debug(
                f"{remote.method} {url} {response.status_code}",
                extra={"status": response.status_code, "backend": base_url},
            )
            return Response(
                data=data,
                is_complete=True,
                metadata=Metadata(
                    status_code=response.status_code,
                    headers={key: response.headers.get_list(key) for key in response.headers.keys()},
                ),
            )

        return proxy

    return factory
