"""
Invocation models.

Mirror the request and result of the Lambda Invoke API.
"""

from dataclasses import dataclass
from typing import Optional

REQUEST_RESPONSE = "RequestResponse"
LOG_TYPE_TAIL = "Tail"


@dataclass(frozen=True)
class InvocationInput:
    function_name: str
    payload: bytes = b""
    invocation_type: str = REQUEST_RESPONSE
    log_type: str = LOG_TYPE_TAIL
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class InvocationOutput:
    """
    Result of a synchronous invocation.

    `function_error` and `log_result` carry the FunctionError and LogResult
    fields of the Invoke answer when the service returns them.
    """

    status_code: Optional[int]
    payload: bytes = b""
    executed_version: Optional[str] = None
    function_error: Optional[str] = None
    log_result: Optional[str] = None
