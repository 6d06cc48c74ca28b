"""Async REST client: JSON requests and multipart media uploads."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from service_handler.clients.base import (
    JSON_CONTENT_TYPE,
    BaseServiceClient,
    join_endpoint,
    method_name,
    with_query_params,
)
from service_handler.clients.multipart import build_multipart_body, content_type, new_boundary
from service_handler.exceptions import DecodeError
from service_handler.models import HttpMethod, MediaFile

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode_json(content: bytes, response_type: Type[T]) -> T:
    """Strictly decode JSON ``content`` into ``response_type``.

    Raises:
        DecodeError: If the bytes are not JSON or do not match the type.
    """
    try:
        return TypeAdapter(response_type).validate_json(content, strict=True)
    except ValidationError as exc:
        raise DecodeError(exc) from exc


class RestClient(BaseServiceClient):
    """REST client bound to a base URL.

    Example:
        client = RestClient("https://api.example.com/v1")
        user = await client.perform_request("users/1", HttpMethod.GET, User)
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(base_url, client=client, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self.url

    async def perform_request(
        self,
        endpoint: str,
        method: Union[HttpMethod, str],
        response_type: Type[T],
        *,
        headers: Optional[Mapping[str, str]] = None,
        query_params: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> T:
        """Send a request and decode the JSON response into ``response_type``.

        Args:
            endpoint: Path appended to the base URL.
            method: HTTP method.
            response_type: Any type pydantic can validate (models, dataclasses,
                TypedDicts, builtin containers).
            headers: Headers set verbatim.
            query_params: Query string, replacing any in the resolved URL.
            body: Raw JSON payload. When non-empty ``Content-Type`` is forced to
                ``application/json``.

        Raises:
            httpx.TransportError: On network, DNS, TLS or timeout failures.
            EmptyBodyError: If the response has no body.
            DecodeError: If the body does not decode into ``response_type``.
        """
        url = with_query_params(join_endpoint(self._url, endpoint), query_params)
        request_headers = httpx.Headers(headers or {})
        content = None
        if body:
            content = bytes(body)
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        payload = await self._execute(HttpMethod(method).value, url, headers=request_headers, content=content)
        return decode_json(payload, response_type)

    async def upload_media(
        self,
        endpoint: str,
        media: Sequence[MediaFile],
        *,
        method: Union[HttpMethod, str] = HttpMethod.POST,
        headers: Optional[Mapping[str, str]] = None,
        additional_fields: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """Upload ``media`` and ``additional_fields`` as multipart/form-data.

        The response body is returned as raw bytes; it is not decoded.
        """
        url = join_endpoint(self._url, endpoint)
        boundary = new_boundary()
        request_headers = httpx.Headers(headers or {})
        request_headers["Content-Type"] = content_type(boundary)
        content = build_multipart_body(media, additional_fields, boundary)

        logger.debug("Uploading %d file(s) to %s", len(media), url)
        return await self._execute(method_name(method), url, headers=request_headers, content=content)
