#!/usr/bin/env python3
"""
Error Handling Utility Module

Provides the error logging pattern used at the digest's I/O seams (Linear fetch,
Discord webhook, SMTP). Every failure is logged once with structured context and
then raised to the caller; nothing here swallows an error.
"""

import logging
from typing import Any, NoReturn


def log_and_raise(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
    cause: BaseException | None = None,
) -> NoReturn:
    """
    Log an error with context and raise it.

    Use this at I/O boundaries where a low-level exception (requests, smtplib)
    is translated into one of the digest's own error types.

    Args:
        logger: Logger instance
        error: The exception to raise
        context: Structured data about what failed
        error_type: Human-readable description
        cause: Original exception, chained as __cause__ when given

    Raises:
        The given exception after logging

    Example:
        try:
            response = post(url, json=payload)
        except requests.RequestException as e:
            log_and_raise(
                logger,
                DeliveryError("discord", f"webhook unreachable: {e}"),
                context={"sink": "discord"},
                error_type="Discord delivery",
                cause=e,
            )
    """
    logger.error(
        f"{error_type} failed: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )
    if cause is not None:
        raise error from cause
    raise error
