# lambda_backend/models/aws_v1.py

"""
Pydantic models for AWS API Gateway v1 (REST API) event structure.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/set-up-lambda-proxy-integrations.html#api-gateway-simple-proxy-for-lambda-input-format

Only the subset of the proxy event produced by the gateway is modelled.
Use model_dump(by_alias=True) without exclude_none: absent multi-value
mappings and path parameters are serialized as null.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ApiGatewayIdentity(BaseModel):
    """API Gateway Identity object."""

    userAgent: str = ""


class ApiGatewayRequestContext(BaseModel):
    """API Gateway Request Context object."""

    path: str
    protocol: str
    httpMethod: str
    identity: ApiGatewayIdentity


class APIGatewayProxyEvent(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Event Structure

    Defines the structure of the event object received by Lambda functions.
    """

    version: str = "1.0"
    path: str
    httpMethod: str
    headers: Dict[str, str]
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    queryStringParameters: Dict[str, str]
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    pathParameters: Optional[Dict[str, str]] = None
    requestContext: ApiGatewayRequestContext
    body: str = ""
