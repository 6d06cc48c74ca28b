"""Async GraphQL client."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from service_handler.clients.base import JSON_CONTENT_TYPE, BaseServiceClient, with_query_params
from service_handler.exceptions import DecodeError, GraphQLError, RequestEncodingError, UnknownResponseError
from service_handler.models import GraphQLRequest, GraphQLResponse, HttpMethod

T = TypeVar("T")


def unwrap_response(content: bytes, response_type: Type[T]) -> T:
    """Decode a ``{data, errors}`` envelope and return its data.

    Errors take precedence over data.

    Raises:
        DecodeError: If the envelope itself does not decode.
        GraphQLError: If ``errors`` is non-empty.
        UnknownResponseError: If there is neither data nor errors.
    """
    try:
        envelope = GraphQLResponse[response_type].model_validate_json(content, strict=True)
    except ValidationError as exc:
        raise DecodeError(exc) from exc

    if envelope.errors:
        raise GraphQLError(envelope.errors)
    if envelope.data is not None:
        return envelope.data
    raise UnknownResponseError()


class GraphQLClient(BaseServiceClient):
    """GraphQL client bound to a single endpoint URL."""

    def __init__(
        self,
        endpoint: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(endpoint, client=client, timeout=timeout)

    @property
    def endpoint(self) -> str:
        return self.url

    async def perform_query(
        self,
        query: str,
        response_type: Type[T],
        *,
        variables: Optional[Mapping[str, Any]] = None,
        method: Union[HttpMethod, str] = HttpMethod.POST,
        headers: Optional[Mapping[str, str]] = None,
        query_params: Optional[Mapping[str, str]] = None,
    ) -> T:
        """Run ``query`` and return the ``data`` of the response.

        Only POST requests carry a body; for other methods ``query`` and
        ``variables`` are not sent.

        Raises:
            RequestEncodingError: If ``variables`` cannot be serialised.
            httpx.TransportError: On network, DNS, TLS or timeout failures.
            EmptyBodyError: If the response has no body.
            DecodeError: If the envelope does not decode.
            GraphQLError: If the server reported errors.
            UnknownResponseError: If the response had neither data nor errors.
        """
        method = HttpMethod(method)
        url = with_query_params(self._url, query_params)
        request_headers = httpx.Headers(headers or {})
        content = None
        if method is HttpMethod.POST:
            request = GraphQLRequest(query=query, variables=dict(variables) if variables is not None else None)
            try:
                content = request.to_json()
            except (PydanticSerializationError, ValueError) as exc:
                raise RequestEncodingError(str(exc)) from exc
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        payload = await self._execute(method.value, url, headers=request_headers, content=content)
        return unwrap_response(payload, response_type)
