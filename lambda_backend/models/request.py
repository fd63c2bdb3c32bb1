"""
Gateway request/response models.

Encapsulates the data exchanged between the gateway and a backend proxy.
"""

from dataclasses import dataclass, field
from typing import Any, AsyncIterable, Awaitable, Callable, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

Body = Union[bytes, AsyncIterable[bytes]]


@dataclass
class Request:
    """
    Request handed to a backend proxy.

    `body` is consumed at most once; route parameter keys keep the case they
    were declared with.
    """

    method: str
    path: str = ""
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, List[str]] = field(default_factory=dict)
    headers: Dict[str, List[str]] = field(default_factory=dict)
    body: Optional[Body] = None
    url: httpx.URL = field(default_factory=httpx.URL)


class Metadata(BaseModel):
    """Response metadata: status code and multi-value headers."""

    status_code: int = 200
    headers: Dict[str, List[str]] = Field(default_factory=dict)


class Response(BaseModel):
    """Response produced by a backend proxy."""

    data: Dict[str, Any] = Field(default_factory=dict)
    is_complete: bool = False
    metadata: Metadata = Field(default_factory=Metadata)


class BackendConfig(BaseModel):
    """
    Route-scoped backend definition.

    `extra_config` holds adapter-specific blocks keyed by namespace; the
    remaining manipulation options are consumed by the entity formatter.
    """

    method: str = "GET"
    url_pattern: str = ""
    host: List[str] = Field(default_factory=list)
    extra_config: Dict[str, Any] = Field(default_factory=dict)

    allow: List[str] = Field(default_factory=list)
    deny: List[str] = Field(default_factory=list)
    mapping: Dict[str, str] = Field(default_factory=dict)
    group: Optional[str] = None
    target: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


class EndpointConfig(BaseModel):
    """Gateway endpoint and the backends serving it."""

    endpoint: str
    method: str = "GET"
    backend: List[BackendConfig] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


Proxy = Callable[[Request], Awaitable[Response]]
BackendFactory = Callable[[BackendConfig], Proxy]
