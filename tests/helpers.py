"""Helper utilities for tests."""

import json
from typing import Any

import httpx


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    """Build a response whose body is ``payload`` encoded as compact JSON."""
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))
