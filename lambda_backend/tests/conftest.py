from unittest.mock import AsyncMock

import pytest

from lambda_backend.core.options import NAMESPACE
from lambda_backend.models.invocation import InvocationOutput
from lambda_backend.models.request import BackendConfig


@pytest.fixture
def lambda_invoker():
    """Invoker double answering with an empty JSON object."""
    invoker = AsyncMock()
    invoker.invoke.return_value = InvocationOutput(status_code=200, payload=b"{}")
    return invoker


@pytest.fixture
def lambda_backend_config():
    """Build a BackendConfig carrying a Lambda extra config."""

    def build(method: str = "GET", **lambda_options) -> BackendConfig:
        return BackendConfig(method=method, extra_config={NAMESPACE: lambda_options})

    return build
