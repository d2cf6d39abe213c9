"""
Core Infrastructure - Configuration, HTTP, Logging

This package provides centralized infrastructure utilities that should be used
throughout the application instead of direct library calls.

Usage:
    from linear_digest.core import get_config, get_logger, post

    config = get_config().get_digest_config()
    logger = get_logger(__name__)
    response = post(api_url, json=payload)  # SSL verified, timeout enforced
"""

from ..http_client import SecureHTTPClient, post
from ..secure_config import (
    ConfigurationError,
    DigestConfig,
    DiscordConfig,
    EmailConfig,
    LinearConfig,
    SecureConfig,
    get_config,
)
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "ConfigurationError",
    "SecureConfig",
    "DigestConfig",
    "LinearConfig",
    "DiscordConfig",
    "EmailConfig",
    # HTTP
    "post",
    "SecureHTTPClient",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
]
