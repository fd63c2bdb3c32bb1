"""
Adapter configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdapterConfig(BaseSettings):
    """
    Configuration management for the Lambda backend adapter.

    Route-level options (region, endpoint, max_retries) override the ambient
    connection values defined here.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default="config/logging.yml", description="Logging definition file path"
    )
    ROUTING_CONFIG_PATH: str = Field(
        default="config/routing.yml", description="Routing definition file path"
    )
    VERIFY_SSL: bool = Field(default=True, description="Whether to verify SSL certificates")

    # Ambient connection settings
    AWS_REGION: Optional[str] = Field(
        default=None, description="Default region (falls back to the boto3 session region)"
    )
    LAMBDA_ENDPOINT_URL: Optional[str] = Field(
        default=None, description="Default Invoke API endpoint override"
    )
    LAMBDA_MAX_RETRIES: int = Field(default=0, ge=0, description="Default SDK retry attempts")
    LAMBDA_INVOKE_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Lambda invoke timeout (seconds)"
    )

    # Fallback HTTP backend
    BACKEND_TIMEOUT: float = Field(default=10.0, gt=0, description="HTTP origin timeout (seconds)")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = AdapterConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
