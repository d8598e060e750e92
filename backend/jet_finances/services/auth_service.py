"""
Client for the BaaS auth REST API (Supabase GoTrue).

Password sign-in and sign-out are async and used by the login routes. The
admin helpers are synchronous and only used by the maintenance scripts;
they require the service role key.
"""
from dataclasses import dataclass
from typing import List, Optional
import logging
import httpx
from jet_finances.core.config import settings
from jet_finances.core.exceptions import AuthServiceError, InvalidCredentials

logger = logging.getLogger(__name__)

ADMIN_USERS_PAGE_SIZE = 1000


@dataclass
class SignInResult:
    """Tokens and identity returned by a successful password sign-in."""
    access_token: str
    auth_id: str
    email: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


def _auth_url(path: str) -> str:
    if not settings.SUPABASE_URL:
        raise AuthServiceError("SUPABASE_URL is not configured")
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1{path}"


def _public_headers(access_token: Optional[str] = None) -> dict:
    headers = {
        "apikey": settings.SUPABASE_ANON_KEY,
        "Content-Type": "application/json"
    }
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def _admin_headers() -> dict:
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise AuthServiceError("SUPABASE_SERVICE_ROLE_KEY is not configured")
    return {
        "apikey": settings.SUPABASE_SERVICE_ROLE_KEY,
        "Authorization": f"Bearer {settings.SUPABASE_SERVICE_ROLE_KEY}",
        "Content-Type": "application/json"
    }


async def sign_in_with_password(email: str, password: str) -> SignInResult:
    """
    Sign in with email and password.

    Args:
        email: Account email
        password: Account password

    Returns:
        SignInResult

    Raises:
        InvalidCredentials: The auth service rejected the credentials
        AuthServiceError: The auth service could not be reached or failed
    """
    url = _auth_url("/token?grant_type=password")
    try:
        async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            response = await client.post(
                url,
                headers=_public_headers(),
                json={"email": email, "password": password}
            )
    except httpx.HTTPError as e:
        logger.error(f"Auth service unreachable during sign-in: {e}")
        raise AuthServiceError("Authentication service unavailable") from e

    if response.status_code in (400, 401):
        logger.info(f"Sign-in rejected for {email}")
        raise InvalidCredentials("Invalid email or password", status_code=response.status_code)
    if response.status_code != 200:
        logger.error(f"Auth service error {response.status_code}: {response.text}")
        raise AuthServiceError("Authentication service error", status_code=response.status_code)

    data = response.json()
    if settings.DEBUG:
        logger.debug(f"Sign-in response keys: {list(data.keys())}")

    user = data.get("user") or {}
    return SignInResult(
        access_token=data["access_token"],
        auth_id=user.get("id", ""),
        email=user.get("email", email),
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in"),
    )


async def sign_out(access_token: str) -> None:
    """Revoke the session at the auth service; failures are logged and ignored."""
    if not access_token or not settings.SUPABASE_URL:
        return
    try:
        async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            response = await client.post(_auth_url("/logout"), headers=_public_headers(access_token))
        if response.status_code >= 400:
            logger.warning(f"Auth service sign-out returned {response.status_code}")
    except httpx.HTTPError as e:
        logger.warning(f"Auth service sign-out failed: {e}")


async def check_auth_health() -> dict:
    """
    Query the auth service health endpoint.

    Raises:
        AuthServiceError: The service is unreachable or unhealthy
    """
    try:
        async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            response = await client.get(_auth_url("/health"), headers=_public_headers())
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Auth health check failed: {e.response.status_code}")
        raise AuthServiceError("Authentication service unhealthy", status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        logger.error(f"Auth health check failed: {e}")
        raise AuthServiceError("Authentication service unavailable") from e
    return response.json()


def list_users(client: Optional[httpx.Client] = None) -> List[dict]:
    """List every auth-service user through the admin API."""
    owns_client = client is None
    client = client or httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS)
    users = []
    page = 1
    try:
        while True:
            response = client.get(
                _auth_url("/admin/users"),
                headers=_admin_headers(),
                params={"page": page, "per_page": ADMIN_USERS_PAGE_SIZE}
            )
            response.raise_for_status()
            batch = response.json().get("users", [])
            users.extend(batch)
            if len(batch) < ADMIN_USERS_PAGE_SIZE:
                break
            page += 1
    except httpx.HTTPError as e:
        logger.error(f"Failed to list auth users: {e}")
        raise AuthServiceError("Failed to list users") from e
    finally:
        if owns_client:
            client.close()
    return users


def find_user_by_email(email: str, client: Optional[httpx.Client] = None) -> Optional[dict]:
    """Find an auth-service user by email (case-insensitive)."""
    email = email.strip().lower()
    for user in list_users(client):
        if (user.get("email") or "").lower() == email:
            return user
    return None


def update_user_password(auth_id: str, password: str, client: Optional[httpx.Client] = None) -> None:
    """Set a new password for an auth-service user."""
    owns_client = client is None
    client = client or httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS)
    try:
        response = client.put(
            _auth_url(f"/admin/users/{auth_id}"),
            headers=_admin_headers(),
            json={"password": password}
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Failed to update password for {auth_id}: {e}")
        raise AuthServiceError("Failed to update password") from e
    finally:
        if owns_client:
            client.close()


def delete_user(auth_id: str, client: Optional[httpx.Client] = None) -> None:
    """Delete an auth-service user."""
    owns_client = client is None
    client = client or httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS)
    try:
        response = client.delete(_auth_url(f"/admin/users/{auth_id}"), headers=_admin_headers())
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Failed to delete auth user {auth_id}: {e}")
        raise AuthServiceError("Failed to delete user") from e
    finally:
        if owns_client:
            client.close()
