"""Transport helpers shared by the REST and GraphQL clients."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from service_handler.config import http_config
from service_handler.exceptions import EmptyBodyError, InvalidURLError
from service_handler.models import HttpMethod

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# RFC 3986 pchar delimiters plus "/" and existing escapes
PATH_SAFE = "/%:@!$&'()*+,;="


def validate_url(url: str) -> httpx.URL:
    """Parse ``url`` and require it to be absolute (scheme and host)."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(url) from exc
    if not parsed.scheme or not parsed.host:
        raise InvalidURLError(url)
    return parsed


def join_endpoint(base_url: httpx.URL, endpoint: str) -> httpx.URL:
    """Append ``endpoint`` to the path of ``base_url`` as a single path component.

    Characters that would end the path (``?``, ``#``) are percent-encoded.
    """
    if not endpoint:
        return base_url
    base_path = quote(base_url.path.rstrip("/"), safe=PATH_SAFE)
    path = base_path + "/" + quote(endpoint.lstrip("/"), safe=PATH_SAFE)
    return base_url.copy_with(path=path)


def with_query_params(url: httpx.URL, query_params: Optional[Mapping[str, str]]) -> httpx.URL:
    """Replace the query string of ``url`` with ``query_params`` (mapping order)."""
    if not query_params:
        return url
    return url.copy_with(params=dict(query_params))


def method_name(method: Union[HttpMethod, str]) -> str:
    if isinstance(method, HttpMethod):
        return method.value
    return str(method)


class BaseServiceClient:
    """Holds the validated URL and the transport settings of a client.

    Args:
        url: Absolute base URL, validated immediately.
        client: Optional ``httpx.AsyncClient`` to send requests on. It is owned
            by the caller and never closed here.
        timeout: Timeout of the client opened per call when ``client`` is not
            given. Defaults to ``http_config.SERVICE_TIMEOUT``.
    """

    def __init__(
        self,
        url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._url = validate_url(url)
        self._client = client
        self._timeout = http_config.SERVICE_TIMEOUT if timeout is None else timeout

    @property
    def url(self) -> str:
        return str(self._url)

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": http_config.USER_AGENT},
        ) as client:
            yield client

    async def _execute(
        self,
        method: str,
        url: httpx.URL,
        *,
        headers: httpx.Headers,
        content: Optional[bytes] = None,
    ) -> bytes:
        """Send one request and return the response body.

        Transport errors propagate unchanged. The status code is not inspected.

        Raises:
            EmptyBodyError: If the response carried no bytes.
        """
        async with self._client_scope() as client:
            request = client.build_request(method, url, headers=headers, content=content)
            logger.debug("%s %s", request.method, request.url)
            response = await client.send(request)
            body = await response.aread()

        logger.debug("%s %s -> %s (%d bytes)", request.method, request.url, response.status_code, len(body))
        if not body:
            raise EmptyBodyError()
        return body
