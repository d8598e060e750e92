"""
Security utilities for BaaS access tokens, CSRF settings and response headers.
"""
from typing import Dict, Optional
import re
from jose import JWTError, jwt
from jet_finances.core.config import settings

# Audience claim the auth service puts on tokens issued to signed-in users
ACCESS_TOKEN_AUDIENCE = "authenticated"
ACCESS_TOKEN_ALGORITHM = "HS256"

# Double-submit CSRF: the token cookie is echoed back in this header
CSRF_COOKIE_NAME = "csrftoken"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_EXEMPT_URLS = [re.compile(r"^/api/auth/login$")]

CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "script-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'",
    "style-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'",
    "img-src 'self' data: https:",
    "connect-src 'self'",
    "frame-ancestors 'self'",
    "object-src 'none'",
])

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}

HSTS_HEADER = "max-age=15552000; includeSubDomains"


def security_headers() -> Dict[str, str]:
    """Headers added to every response; HSTS only when cookies are HTTPS-only."""
    headers = dict(SECURITY_HEADERS)
    if settings.SESSION_HTTPS_ONLY:
        headers["Strict-Transport-Security"] = HSTS_HEADER
    return headers


def token_verification_enabled() -> bool:
    """Tokens are only verified locally when the project JWT secret is configured."""
    return bool(settings.SUPABASE_JWT_SECRET)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify an access token issued by the auth service."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[ACCESS_TOKEN_ALGORITHM],
            audience=ACCESS_TOKEN_AUDIENCE,
        )
        return payload
    except JWTError:
        return None
