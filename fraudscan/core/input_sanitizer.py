"""
Input Sanitization and Validation Module
Caller-side checks run before content reaches the scoring engine.

The engine itself accepts any string; these helpers reject empty,
oversized or null-byte input at the HTTP and CLI edges.
"""

import logging
from typing import Optional, Tuple

from fraudscan.core.config import settings

logger = logging.getLogger(__name__)


def sanitize_email_content(content: str, max_length: int = None) -> Tuple[str, Optional[str]]:
    """
    Validate email content for analysis.

    Returns:
        Tuple of (content, error_message)
        If error_message is not None, the content should be rejected
    """
    max_length = max_length or settings.MAX_EMAIL_LENGTH

    if not content or not content.strip():
        return "", "Email content cannot be empty"

    if len(content) > max_length:
        return "", f"Email content exceeds maximum length of {max_length} characters"

    # Check for null bytes
    if '\x00' in content:
        logger.warning("Blocked null byte in email content")
        return "", "Invalid email content"

    return content, None


def sanitize_url_input(url: str, max_length: int = None) -> Tuple[str, Optional[str]]:
    """
    Validate a URL or bare hostname for analysis.

    Returns:
        Tuple of (stripped_url, error_message)
    """
    max_length = max_length or settings.MAX_URL_LENGTH

    if not url or not url.strip():
        return "", "URL cannot be empty"

    url = url.strip()

    if len(url) > max_length:
        return "", f"URL exceeds maximum length of {max_length} characters"

    if '\x00' in url:
        logger.warning("Blocked null byte in URL")
        return "", "Invalid URL"

    return url, None


def validate_limit(limit: int, max_limit: int = 100, default: int = 10) -> int:
    """
    Validate and constrain a limit parameter.

    - Returns default if limit is <= 0 or not an integer
    - Caps at max_limit if limit exceeds it
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return default

    if limit <= 0:
        return default

    return min(limit, max_limit)


def log_security_event(event_type: str, details: str, ip_address: str = None):
    """
    Log security-related events for monitoring and alerting.
    """
    log_msg = f"SECURITY_EVENT: {event_type}"
    if ip_address:
        log_msg += f" | IP: {ip_address}"
    log_msg += f" | Details: {details}"
    logger.warning(log_msg)
