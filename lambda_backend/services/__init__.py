"""
Services package.

Provides the invocation client, HTTP fallback backend and response formatting.
"""

from .entity_formatter import PropertyFilterFormatter, new_entity_formatter
from .http_backend import http_backend_factory
from .invoker import Invoker, LambdaInvoker, invoker_factory

__all__ = [
    "PropertyFilterFormatter",
    "new_entity_formatter",
    "http_backend_factory",
    "LambdaInvoker",
    "Invoker",
    "invoker_factory",
]
