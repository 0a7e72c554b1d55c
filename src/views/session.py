"""Current-user resolution for views."""

from typing import Optional

from src.models.user import AuthUser
from src.services.auth import get_current_user
from src.utils.errors import AuthenticationError

SIGN_IN_PATH = "/sign-in"
HOME_PATH = "/"


async def require_user(access_token: Optional[str]) -> AuthUser:
    """Resolve the signed-in user or raise with a redirect to sign-in."""
    user = await get_current_user(access_token)
    if user is None:
        raise AuthenticationError("Not signed in", redirect_to=SIGN_IN_PATH)
    return user
