"""
Request rate limiting for the authentication endpoints.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from jet_finances.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def login_rate_limit() -> str:
    """Configured limit for login attempts per client address, e.g. "5/minute"."""
    return settings.LOGIN_RATE_LIMIT
