"""
Lambda route configuration parser.

Validates the extra config block stored under NAMESPACE and turns it into
the immutable LambdaOptions closed over by the route's proxy.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, ValidationError

from ..models.request import BackendConfig
from .exceptions import MalformedAdapterConfig, NoAdapterConfig
from .function_name import (
    DEFAULT_FUNCTION_PARAM,
    ConstantFunctionName,
    FunctionResolver,
    ParamFunctionName,
)
from .payload import PayloadFormat, select_payload_format

NAMESPACE = "github.com/devopsfaith/krakend-lambda"


class ApiGatewayFormatConfig(BaseModel):
    enabled: StrictBool = False

    model_config = ConfigDict(extra="ignore")


class LambdaExtraConfig(BaseModel):
    """Schema of the block stored under NAMESPACE."""

    function_name: Optional[StrictStr] = None
    function_param_name: Optional[StrictStr] = None
    region: Optional[StrictStr] = None
    endpoint: Optional[StrictStr] = None
    max_retries: Optional[StrictInt] = None
    qualifier: Optional[StrictStr] = None
    aws_api_gateway_format: Optional[ApiGatewayFormatConfig] = None

    model_config = ConfigDict(extra="ignore", frozen=True)


@dataclass(frozen=True)
class ConnectionOptions:
    """Per-route connection overrides. None means "use the ambient value"."""

    region: Optional[str] = None
    endpoint: Optional[str] = None
    max_retries: Optional[int] = None


@dataclass(frozen=True)
class LambdaOptions:
    function_resolver: FunctionResolver
    payload_format: PayloadFormat
    connection: Optional[ConnectionOptions] = None
    qualifier: Optional[str] = None


def _format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def parse_options(backend: BackendConfig) -> LambdaOptions:
    """
    Build the LambdaOptions of a route.

    Raises:
        NoAdapterConfig: the route has no block under NAMESPACE
        MalformedAdapterConfig: the block is not a mapping or has wrong types
    """
    if NAMESPACE not in backend.extra_config:
        raise NoAdapterConfig(NAMESPACE)

    raw = backend.extra_config[NAMESPACE]
    if not isinstance(raw, Mapping):
        raise MalformedAdapterConfig(f"expected a mapping, got {type(raw).__name__}")

    try:
        ecfg = LambdaExtraConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise MalformedAdapterConfig(_format_errors(e)) from e

    if ecfg.function_name is not None:
        resolver: FunctionResolver = ConstantFunctionName(ecfg.function_name)
    elif ecfg.function_param_name is not None:
        resolver = ParamFunctionName(ecfg.function_param_name)
    else:
        resolver = ParamFunctionName(DEFAULT_FUNCTION_PARAM)

    api_gateway_format: Optional[Mapping[str, Any]] = None
    if ecfg.aws_api_gateway_format is not None:
        api_gateway_format = ecfg.aws_api_gateway_format.model_dump()

    connection = None
    if ecfg.region is not None or ecfg.endpoint is not None or ecfg.max_retries is not None:
        connection = ConnectionOptions(
            region=ecfg.region,
            endpoint=ecfg.endpoint,
            max_retries=ecfg.max_retries,
        )

    return LambdaOptions(
        function_resolver=resolver,
        payload_format=select_payload_format(backend.method, api_gateway_format),
        connection=connection,
        qualifier=ecfg.qualifier,
    )
