"""Secure logging utilities to prevent information disclosure."""

import logging
import re


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logs and client-facing detail.

    Removes potentially sensitive information like:
    - File system paths
    - Database connection strings
    - Email addresses
    - API keys/tokens

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production
    """
    error_msg = str(error)

    # Remove anything that looks like a connection string
    url_pattern = r"(postgresql|postgres|sqlite|redis|http|https)(\+\w+)?://[^\s]+"
    error_msg = re.sub(url_pattern, "[URL]", error_msg)

    # Remove file paths (Unix and Windows)
    error_msg = re.sub(r"['\"]?(/[a-zA-Z0-9_.\-]+/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?", "[PATH]", error_msg)

    # Remove email addresses
    error_msg = re.sub(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+", "[EMAIL]", error_msg)

    # Remove potential API keys/tokens (long alphanumeric strings)
    error_msg = re.sub(r"[a-zA-Z0-9_\-]{32,}", "[TOKEN]", error_msg)

    # Truncate very long messages
    if len(error_msg) > 200:
        error_msg = error_msg[:197] + "..."

    return error_msg


def store_error_detail(error: Exception, debug: bool = False) -> str:
    """Detail text for a failed store operation, as returned to clients.

    Args:
        error: The store exception
        debug: Return the raw message instead of the sanitized one

    Returns:
        Error detail string
    """
    if debug:
        return str(getattr(error, "orig", None) or error)
    return sanitize_exception_message(getattr(error, "orig", None) or error)


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    debug: bool = False,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details.
    In production, logs sanitized message without sensitive details.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        debug: Whether the application runs in debug mode
    """
    if error is None:
        logger.error(message)
    elif debug:
        logger.error(f"{message}: {error}", exc_info=True)
    else:
        logger.error(f"{message}: {sanitize_exception_message(error)}")
