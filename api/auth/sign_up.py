"""Sign-up endpoint."""

from src.services.auth import USER_EXISTS, sign_up
from src.utils.http import JSONRequestHandler
from src.utils.logging_config import LoggingConfig
from src.views.session import SIGN_IN_PATH

LoggingConfig.setup_logging()


class handler(JSONRequestHandler):
    """Vercel serverless function handler for /api/auth/sign_up."""

    def do_POST(self):
        self.dispatch(self._post)

    async def _post(self):
        body = self.read_json()
        result = await sign_up(
            body.get("name") or "",
            body.get("email") or "",
            body.get("password") or "",
        )
        if not result.success:
            return 409 if result.message == USER_EXISTS else 502, {
                "ok": False,
                "message": result.message,
            }
        return 201, {"ok": True, "message": result.message, "redirect": SIGN_IN_PATH}
