"""Configuration module for the violation detection service."""

from config.constants import (DEFAULT_SERVER_HOST,
                              INFERENCE_STRATEGY,
                              MULTI_PROBE_API_URL,
                              SERVER_PORT,
                              SINGLE_PROBE_API_URL)

__all__ = [
    "INFERENCE_STRATEGY",
    "MULTI_PROBE_API_URL",
    "SINGLE_PROBE_API_URL",
    "DEFAULT_SERVER_HOST",
    "SERVER_PORT",
]
