"""
Data model definitions package.

Aggregates the gateway, invocation and API Gateway event models.
"""

from .aws_v1 import APIGatewayProxyEvent
from .invocation import InvocationInput, InvocationOutput
from .request import BackendConfig, EndpointConfig, Metadata, Request, Response

__all__ = [
    "APIGatewayProxyEvent",
    "InvocationInput",
    "InvocationOutput",
    "BackendConfig",
    "EndpointConfig",
    "Metadata",
    "Request",
    "Response",
]
