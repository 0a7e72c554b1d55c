"""Sign-out endpoint."""

from src.services.auth import sign_out
from src.utils.http import JSONRequestHandler, session_cookie
from src.utils.logging_config import LoggingConfig
from src.views.session import SIGN_IN_PATH

LoggingConfig.setup_logging()


class handler(JSONRequestHandler):
    """Vercel serverless function handler for /api/auth/sign_out."""

    def do_POST(self):
        self.dispatch(self._post)

    async def _post(self):
        await sign_out(self.access_token())
        return 200, {"ok": True, "redirect": SIGN_IN_PATH}, {"Set-Cookie": session_cookie(None)}
