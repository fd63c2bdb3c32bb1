"""
Lambda backend for API gateways.

Routes whose backend carries an extra config under NAMESPACE are served by
synchronously invoking an AWS Lambda function; every other route is handed
to the fallback backend factory.
"""

__version__ = "0.1.0"

from .core.backend import backend_factory
from .core.options import NAMESPACE, LambdaOptions, parse_options
from .models.request import BackendConfig, Request, Response

__all__ = [
    "NAMESPACE",
    "BackendConfig",
    "LambdaOptions",
    "Request",
    "Response",
    "backend_factory",
    "parse_options",
]
