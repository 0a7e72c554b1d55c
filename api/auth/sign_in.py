"""Sign-in endpoint."""

from src.services.auth import sign_in
from src.utils.http import JSONRequestHandler, session_cookie
from src.utils.logging_config import LoggingConfig
from src.views.session import HOME_PATH

LoggingConfig.setup_logging()


class handler(JSONRequestHandler):
    """Vercel serverless function handler for /api/auth/sign_in."""

    def do_POST(self):
        self.dispatch(self._post)

    async def _post(self):
        body = self.read_json()
        result = await sign_in(body.get("email") or "", body.get("password") or "")
        if not result.success:
            return 401, {"ok": False, "message": result.message}

        return 200, {
            "ok": True,
            "message": result.message,
            "user": result.user.model_dump(),
            "access_token": result.access_token,
            "refresh_token": result.refresh_token,
            "redirect": HOME_PATH,
        }, {"Set-Cookie": session_cookie(result.access_token, result.expires_in)}
