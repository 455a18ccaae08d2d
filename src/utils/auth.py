"""
Authentication utility functions.
"""
import hmac
import logging
import os
from typing import Dict, Any, Optional

# Configure logging
logger = logging.getLogger(__name__)

class NotAuthorized(Exception):
    """Raised when a caller is not authorized to use an endpoint."""
    pass

class NotFound(Exception):
    """Raised when a requested resource is not found."""
    pass

def get_header(event: Dict[str, Any], header_name: str) -> Optional[str]:
    """
    Extract a header from the event, ignoring case.

    Args:
        event: The Lambda event object

    Returns:
        The header value if present, None otherwise
    """
    headers = event.get("headers") or {}
    wanted = header_name.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            return value
    return None

def check_sync_api_key(event: Dict[str, Any]) -> None:
    """
    Verify the shared API key sent by the trade sync bot.

    Raises:
        NotAuthorized: If the key is missing, wrong, or no key is configured
    """
    expected = os.environ.get("SYNC_API_KEY")
    provided = get_header(event, "x-api-key")
    if not expected:
        logger.warning("SYNC_API_KEY is not configured, rejecting sync request")
        raise NotAuthorized("Unauthorized")
    if not provided or not hmac.compare_digest(provided, expected):
        logger.warning("Sync request with missing or invalid API key")
        raise NotAuthorized("Unauthorized")
