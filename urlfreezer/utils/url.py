"""
URL validation and processing utilities.
"""

import logging
from urllib.parse import urlparse

from .constants import ALLOWED_SCHEMES, MAX_LOG_LENGTH

logger = logging.getLogger(__name__)

def is_valid_url(url: str) -> bool:
    """
    Check if URL is an absolute, well-formed http(s) URL.
    
    Args:
        url: URL to validate
        
    Returns:
        bool: True if URL is valid
    """
    if not isinstance(url, str) or not url or has_invalid_chars(url):
        return False

    try:
        parsed = urlparse(url)
        # Accessing the port validates it
        parsed.port
    except ValueError as e:
        logger.debug(f"Invalid URL {truncate_url(url)}: {e}")
        return False

    if parsed.scheme not in ALLOWED_SCHEMES:
        return False
    return bool(parsed.hostname)

def has_invalid_chars(value: str) -> bool:
    """Check for whitespace or control characters that cannot appear in a URL."""
    return any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7f for c in value)

def truncate_url(url: str, max_length: int = MAX_LOG_LENGTH) -> str:
    """
    Truncate URL for logging purposes.
    
    Args:
        url: URL to truncate
        max_length: Maximum length
        
    Returns:
        str: Truncated URL
    """
    if len(url) <= max_length:
        return url
    return url[:max_length] + "..."
