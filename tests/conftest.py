"""Test configuration for pytest."""

from __future__ import annotations

from typing import Callable, List, Tuple, Union

import httpx
import pytest

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def stub_client() -> Callable[[Union[Handler, httpx.Response]], Tuple[httpx.AsyncClient, List[httpx.Request]]]:
    """Factory for an ``httpx.AsyncClient`` backed by ``httpx.MockTransport``.

    Accepts either a handler or a fixed response. Returns the client and the
    list that every sent request is appended to.
    """

    def _factory(handler: Union[Handler, httpx.Response]):
        captured: List[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            if isinstance(handler, httpx.Response):
                return handler
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_handle)), captured

    return _factory
