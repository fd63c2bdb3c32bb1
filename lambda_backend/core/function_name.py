"""
Function name resolution.

A route either targets a fixed function or reads the function name from one
of its request parameters.
"""

from dataclasses import dataclass
from typing import Protocol

from ..models.request import Request

DEFAULT_FUNCTION_PARAM = "function"


class FunctionResolver(Protocol):
    def __call__(self, request: Request) -> str: ...


@dataclass(frozen=True)
class ConstantFunctionName:
    """Always resolves to the configured function name."""

    name: str

    def __call__(self, request: Request) -> str:
        return self.name


@dataclass(frozen=True)
class ParamFunctionName:
    """
    Resolves the function name from a route parameter.

    Parameter keys are case-sensitive. A missing parameter resolves to "".
    """

    param_name: str = DEFAULT_FUNCTION_PARAM

    def __call__(self, request: Request) -> str:
        return request.params.get(self.param_name, "")
