"""Auth service - thin wrapper over Supabase Auth."""

import os
from typing import Any, Optional

from src.models.user import AuthResult, AuthUser
from src.services.supabase_client import SupabaseClient, get_auth_client
from src.services.validators import validate_credentials
from src.utils.logging import get_structured_logger, mask_sensitive_data, mask_user_id, timed

logger = get_structured_logger(__name__)

PROFILES_TABLE = os.environ.get("PROFILES_TABLE", "profiles")

SIGN_IN_FAILED = "Sign in failed. Please try again."
SIGN_UP_FAILED = "Failed to create an account. Please try again."
USER_EXISTS = "User already exists. Please sign in."
SIGN_UP_OK = "Account created successfully. Please sign in."
SIGN_IN_OK = "Signed in successfully."


def _to_auth_user(user: Any) -> AuthUser:
    """Map a Supabase Auth user object to AuthUser."""
    metadata = getattr(user, "user_metadata", None) or {}
    email = getattr(user, "email", None) or ""
    name = metadata.get("name") or metadata.get("full_name") or email.split("@")[0]
    return AuthUser(id=str(user.id), name=name, email=email)


async def get_current_user(access_token: Optional[str]) -> Optional[AuthUser]:
    """Resolve the user behind an access token; None when absent or invalid."""
    if not access_token:
        return None

    client = get_auth_client()
    try:
        response = client.auth.get_user(access_token)
    except Exception as e:
        logger.warning("Could not resolve current user", error=mask_sensitive_data(str(e)))
        return None

    if response is None or getattr(response, "user", None) is None:
        return None
    return _to_auth_user(response.user)


@timed("auth.sign_in")
async def sign_in(email: str, password: str) -> AuthResult:
    """Sign in with email and password."""
    validate_credentials(email, password)

    client = get_auth_client()
    try:
        response = client.auth.sign_in_with_password(
            {"email": email.strip(), "password": password}
        )
    except Exception as e:
        logger.warning("Sign in failed", error=mask_sensitive_data(str(e)))
        return AuthResult(success=False, message=SIGN_IN_FAILED)

    session = getattr(response, "session", None)
    if response.user is None or session is None or not session.access_token:
        logger.warning("Sign in returned no session")
        return AuthResult(success=False, message=SIGN_IN_FAILED)

    user = _to_auth_user(response.user)
    logger.info("User signed in", user_id=mask_user_id(user.id))
    return AuthResult(
        success=True,
        message=SIGN_IN_OK,
        user=user,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=getattr(session, "expires_in", None),
    )


@timed("auth.sign_up")
async def sign_up(name: str, email: str, password: str) -> AuthResult:
    """Create an identity plus its profile row."""
    validate_credentials(email, password, name=name, sign_up=True)
    name = name.strip()
    email = email.strip()

    client = get_auth_client()
    try:
        response = client.auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {"name": name}},
        })
    except Exception as e:
        if "already registered" in str(e).lower() or "already exists" in str(e).lower():
            return AuthResult(success=False, message=USER_EXISTS)
        logger.error("Sign up failed", error=mask_sensitive_data(str(e)))
        return AuthResult(success=False, message=SIGN_UP_FAILED)

    if response.user is None:
        return AuthResult(success=False, message=SIGN_UP_FAILED)

    # With email confirmation on, an existing address comes back with no identities
    identities = getattr(response.user, "identities", None)
    if identities is not None and len(identities) == 0:
        return AuthResult(success=False, message=USER_EXISTS)

    user = _to_auth_user(response.user)

    async with SupabaseClient() as client:
        try:
            client.table(PROFILES_TABLE).upsert({
                "id": user.id,
                "name": name,
                "email": email,
            }).execute()
        except Exception as e:
            logger.error(
                "Failed to store profile",
                user_id=mask_user_id(user.id),
                error=mask_sensitive_data(str(e)),
            )
            return AuthResult(success=False, message=SIGN_UP_FAILED)

    logger.info("User signed up", user_id=mask_user_id(user.id))
    return AuthResult(success=True, message=SIGN_UP_OK, user=user)


async def sign_out(access_token: Optional[str]) -> None:
    """Revoke the session behind an access token."""
    if not access_token:
        return

    async with SupabaseClient() as client:
        try:
            client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.warning("Sign out failed", error=mask_sensitive_data(str(e)))
