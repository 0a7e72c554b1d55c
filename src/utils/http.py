"""Shared plumbing for the serverless JSON endpoints."""

import asyncio
import json
import os
from http.cookies import SimpleCookie
from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qs, urlparse

from src.utils.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StoreError,
    SupabaseError,
    ValidationError,
)
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "session")
# Cookie lifetime when the provider does not report one (one week)
SESSION_MAX_AGE = int(os.environ.get("SESSION_MAX_AGE", "604800"))

# (status, body) or (status, body, extra headers)
Response = tuple


def error_response(exc: Exception) -> Response:
    """Map an exception to an HTTP status and JSON body."""
    if isinstance(exc, AuthenticationError):
        return 401, {"error": "not signed in", "redirect": exc.redirect_to}
    if isinstance(exc, ValidationError):
        return 400, {"error": str(exc)}
    if isinstance(exc, NotFoundError):
        return 404, {"error": "task not found"}
    if isinstance(exc, AuthorizationError):
        return 403, {"error": "forbidden"}
    if isinstance(exc, StoreError):
        return 502, {"error": "task store unavailable"}
    if isinstance(exc, SupabaseError):
        return 503, {"error": "backend not configured"}
    return 500, {"error": "internal server error"}


def session_cookie(access_token: Optional[str], max_age: Optional[int] = None) -> str:
    """Set-Cookie value carrying (or clearing, when None) the access token."""
    if access_token is None:
        return f"{SESSION_COOKIE_NAME}=; Path=/; Max-Age=0; HttpOnly; Secure; SameSite=Lax"
    max_age = max_age or SESSION_MAX_AGE
    return f"{SESSION_COOKIE_NAME}={access_token}; Path=/; Max-Age={max_age}; HttpOnly; Secure; SameSite=Lax"


class JSONRequestHandler(BaseHTTPRequestHandler):
    """Base class for Vercel serverless handlers speaking JSON."""

    def send_json(self, status: int, payload: Any, headers: Optional[dict] = None) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def read_json(self) -> dict:
        content_length = int(self.headers.get('Content-Length', 0) or 0)
        raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
        if not raw_body:
            return {}
        try:
            body = json.loads(raw_body)
        except json.JSONDecodeError as e:
            raise ValidationError("Request body must be valid JSON") from e
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body

    def query_param(self, name: str) -> Optional[str]:
        values = parse_qs(urlparse(self.path).query).get(name)
        return values[0] if values else None

    def access_token(self) -> Optional[str]:
        """Bearer token from the Authorization header, else the session cookie."""
        authorization = self.headers.get("Authorization", "")
        if authorization.lower().startswith("bearer "):
            return authorization[7:].strip() or None

        cookie_header = self.headers.get("Cookie")
        if cookie_header:
            cookie = SimpleCookie()
            cookie.load(cookie_header)
            if SESSION_COOKIE_NAME in cookie:
                return cookie[SESSION_COOKIE_NAME].value or None
        return None

    def dispatch(self, action: Callable[[], Awaitable[Response]], headers: Optional[dict] = None) -> None:
        """Run an async action under a correlation ID and write its response."""
        header_name = LoggingConfig.LOG_CORRELATION_ID_HEADER
        with correlation_context(self.headers.get(header_name)) as correlation_id:
            response_headers = {header_name: correlation_id, **(headers or {})}
            try:
                result = asyncio.run(action())
                status, payload = result[0], result[1]
                if len(result) > 2:
                    response_headers.update(result[2])
            except Exception as e:
                status, payload = error_response(e)
                if status >= 500:
                    logger.error(
                        f"Error handling {self.command} request",
                        exc_info=True,
                        path=urlparse(self.path).path,
                        error=str(e),
                    )
                else:
                    logger.info(
                        f"Rejected {self.command} request",
                        path=urlparse(self.path).path,
                        status_code=status,
                    )
            self.send_json(status, payload, response_headers)

    def log_message(self, format, *args):
        logger.debug(format % args, client=self.address_string())
