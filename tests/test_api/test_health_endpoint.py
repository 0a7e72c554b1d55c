"""Tests for health check endpoint."""

import pytest
from http.server import BaseHTTPRequestHandler

from api.health import handler
from tests.utils.helpers import call_handler


@pytest.mark.unit
def test_health_handler_class():
    """Test that handler is a BaseHTTPRequestHandler subclass."""
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
def test_health_get_request():
    status, headers, body = call_handler(handler, "GET", "/api/health")

    assert status == 200
    assert headers["Content-Type"] == "application/json"
    assert body == {"status": "ok", "service": "tick-backend"}


@pytest.mark.unit
def test_health_post_request():
    status, _, body = call_handler(handler, "POST", "/api/health")

    assert status == 200
    assert body["status"] == "ok"
