"""
Core logic package.

Provides the configuration parser, payload extraction and error taxonomy.
"""

from .exceptions import (
    BadStatusCode,
    BodyReadError,
    LambdaBackendError,
    MalformedAdapterConfig,
    NoAdapterConfig,
    ResponseDecodeError,
)
from .options import NAMESPACE, ConnectionOptions, LambdaOptions, parse_options
from .payload import PayloadFormat, read_body

__all__ = [
    "BadStatusCode",
    "BodyReadError",
    "LambdaBackendError",
    "MalformedAdapterConfig",
    "NoAdapterConfig",
    "ResponseDecodeError",
    "NAMESPACE",
    "ConnectionOptions",
    "LambdaOptions",
    "parse_options",
    "PayloadFormat",
    "read_body",
]
