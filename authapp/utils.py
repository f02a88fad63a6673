"""
Utility functions for the Auth App
Handles display-name fallbacks and request helpers
"""

from flask import request


# ============================================
# Display Helpers
# ============================================

def first_non_empty(*candidates, default=None):
    """
    Return the first candidate that is not None or empty

    Args:
        candidates: Values in order of precedence
        default: Returned when every candidate is empty

    Returns:
        The first non-empty candidate, or default
    """
    for candidate in candidates:
        if candidate:
            return candidate
    return default


def email_local_part(email: str) -> str:
    """
    Get the part of an email address before the '@'

    Args:
        email: Email address (may be None)

    Returns:
        str: The local part, or an empty string
    """
    if not email:
        return ""
    return email.split('@')[0]


def initial(value: str) -> str:
    """First character of a value, or an empty string."""
    return value[:1] if value else ""


# ============================================
# Request Helpers
# ============================================

def get_client_ip() -> str:
    """
    Get the client's real IP address, considering proxies

    Returns:
        str: Client IP address
    """
    # Check for forwarded headers (when behind proxy/load balancer)
    if request.headers.get('X-Forwarded-For'):
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    elif request.headers.get('X-Real-IP'):
        return request.headers.get('X-Real-IP')
    else:
        return request.remote_addr or 'unknown'
