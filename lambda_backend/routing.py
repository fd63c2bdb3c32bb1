"""
Routing table loader.

Loads routing.yml and validates each endpoint with its backends.
"""

import logging
import os
import string
from typing import List

import yaml
from pydantic import ValidationError

from .models.request import EndpointConfig

logger = logging.getLogger("lambda_backend.routing")


def load_endpoints(config_path: str) -> List[EndpointConfig]:
    """
    Load routing.yml.

    ${VAR} placeholders are substituted from the environment. A missing or
    unparsable file yields no endpoints.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            template = string.Template(f.read())
    except FileNotFoundError:
        logger.warning(f"Routing config not found at {config_path}")
        return []

    content = template.safe_substitute(os.environ)
    try:
        cfg = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing routing config: {e}")
        return []

    endpoints = []
    for index, raw in enumerate(cfg.get("endpoints") or []):
        try:
            endpoints.append(EndpointConfig.model_validate(raw))
        except ValidationError as e:
            logger.error(
                f"Skipping invalid endpoint #{index} in {config_path}: {e}",
                extra={"endpoint_index": index},
            )

    logger.info(f"Loaded {len(endpoints)} endpoints from {config_path}")
    return endpoints
