"""Health check endpoint."""

from src.utils.http import JSONRequestHandler


class handler(JSONRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        self.send_json(200, {"status": "ok", "service": "tick-backend"})

    def do_POST(self):
        """Same as GET for health check."""
        self.do_GET()
