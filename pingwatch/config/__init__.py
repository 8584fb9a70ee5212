"""Endpoint configuration loading."""

from pingwatch.config.loader import ConfigValidationError, EndpointsLoader
from pingwatch.config.schemas import EndpointConfig, EndpointsConfig


__all__ = [
    "ConfigValidationError",
    "EndpointConfig",
    "EndpointsConfig",
    "EndpointsLoader",
]
