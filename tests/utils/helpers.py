"""Test helper functions."""

import json
from io import BytesIO
from typing import Any, Dict, Optional, Tuple


class MockSocket:
    """Socket that replays a raw HTTP request and captures the response."""

    def __init__(self, raw_request: bytes):
        self._raw_request = raw_request
        self.sent = bytearray()

    def makefile(self, *args, **kwargs):
        return BytesIO(self._raw_request)

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def build_raw_request(
    method: str,
    path: str,
    body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Serialize an HTTP/1.1 request."""
    payload = b""
    if body is not None:
        payload = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")

    lines = [f"{method} {path} HTTP/1.1", "Host: localhost"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    if payload:
        lines.append("Content-Type: application/json")
        lines.append(f"Content-Length: {len(payload)}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + payload


def call_handler(
    handler_cls,
    method: str,
    path: str,
    body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Tuple[int, Dict[str, str], Any]:
    """Run a serverless handler against one request; returns (status, headers, json body)."""
    sock = MockSocket(build_raw_request(method, path, body, headers))
    handler_cls(sock, ("127.0.0.1", 8000), None)

    head, _, raw_body = bytes(sock.sent).partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    status = int(lines[0].split()[1])
    response_headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(": ")
        response_headers[name] = value

    return status, response_headers, json.loads(raw_body) if raw_body else None


def auth_headers(token: str = "test-access-token") -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
