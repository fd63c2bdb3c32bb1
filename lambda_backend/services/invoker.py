"""
Lambda Invoker Service

Sends synchronous Invoke requests through a boto3 Lambda client. Region,
credentials, signing and retries are handled by botocore, so the usual AWS
environment/profile configuration applies. The blocking client call runs in a
worker thread to keep the event loop free.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Protocol

import boto3.session
from botocore.config import Config

from ..config import AdapterConfig, config as default_config
from ..core.options import ConnectionOptions
from ..models.invocation import InvocationInput, InvocationOutput

logger = logging.getLogger("lambda_backend.invoker")

DEFAULT_REGION = "us-east-1"
RETRY_MODE = "standard"
MAX_POOL_CONNECTIONS = 100


class Invoker(Protocol):
    """
    Synchronous invocation capability.

    Implementations are shared by every request of a route and must be safe
    for concurrent use. Cancelling the awaiting task abandons the call.
    """

    async def invoke(self, invocation: InvocationInput) -> InvocationOutput: ...


InvokerFactory = Callable[[Optional[ConnectionOptions]], Invoker]


class LambdaInvoker:
    def __init__(self, client: Any):
        """
        Args:
            client: boto3 Lambda client owned by this invoker
        """
        self.client = client

    async def invoke(self, invocation: InvocationInput) -> InvocationOutput:
        """
        Invoke a Lambda function and wait for its result.

        Raises:
            botocore.exceptions.ClientError: the Invoke API answered with an error
            botocore.exceptions.BotoCoreError: transport or credential failure
        """
        logger.debug(
            f"Invoking {invocation.function_name}",
            extra={
                "function_name": invocation.function_name,
                "qualifier": invocation.qualifier,
                "payload_size": len(invocation.payload),
            },
        )
        return await asyncio.to_thread(self._invoke, invocation)

    def _invoke(self, invocation: InvocationInput) -> InvocationOutput:
        params: Dict[str, Any] = {
            "FunctionName": invocation.function_name,
            "InvocationType": invocation.invocation_type,
            "LogType": invocation.log_type,
            "Payload": invocation.payload,
        }
        if invocation.qualifier:
            params["Qualifier"] = invocation.qualifier

        response = self.client.invoke(**params)

        # Payload is a StreamingBody; read it while still off the loop.
        payload = response.get("Payload")
        return InvocationOutput(
            status_code=response.get("StatusCode"),
            payload=payload.read() if payload is not None else b"",
            executed_version=response.get("ExecutedVersion"),
            function_error=response.get("FunctionError"),
            log_result=response.get("LogResult"),
        )

    def close(self) -> None:
        self.client.close()


def invoker_factory(
    connection: Optional[ConnectionOptions], config: AdapterConfig = default_config
) -> LambdaInvoker:
    """
    Build a LambdaInvoker for a route.

    Values missing from the route's connection options fall back to the
    ambient configuration, then to the boto3 session.
    """
    connection = connection or ConnectionOptions()

    session = boto3.session.Session(region_name=connection.region or config.AWS_REGION)
    region = session.region_name or DEFAULT_REGION
    endpoint = connection.endpoint or config.LAMBDA_ENDPOINT_URL
    retries = (
        connection.max_retries if connection.max_retries is not None else config.LAMBDA_MAX_RETRIES
    )

    client = session.client(
        "lambda",
        region_name=region,
        endpoint_url=endpoint,
        verify=config.VERIFY_SSL,
        config=Config(
            retries={"max_attempts": retries, "mode": RETRY_MODE},
            read_timeout=config.LAMBDA_INVOKE_TIMEOUT,
            max_pool_connections=MAX_POOL_CONNECTIONS,
        ),
    )

    logger.info(
        f"Lambda invoker created for {endpoint or region}",
        extra={"endpoint": endpoint, "region": region, "max_retries": retries},
    )
    return LambdaInvoker(client)
