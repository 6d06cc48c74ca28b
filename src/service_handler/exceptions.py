"""Shared exception types for service-handler clients."""

from __future__ import annotations

from typing import List, Sequence

from httpx import TransportError
from pydantic import ValidationError

from service_handler.models import GraphQLErrorMessage

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "EmptyBodyError",
    "GraphQLError",
    "InvalidURLError",
    "RequestEncodingError",
    "ServiceHandlerError",
    "TransportError",
    "UnknownResponseError",
]


class ConfigurationError(ValueError):
    """Base exception for invalid client configuration.

    Raised while a client is being constructed, never while a request is in
    flight.
    """


class InvalidURLError(ConfigurationError):
    """The base URL or endpoint handed to a client is not an absolute URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url!r}")
        self.url = url


class ServiceHandlerError(RuntimeError):
    """Base exception for errors reported by a request."""

    def __init__(self, message: str, *, error_code: str = "service_handler_error") -> None:
        super().__init__(message)
        self.error_code = error_code


class EmptyBodyError(ServiceHandlerError):
    """The transport succeeded but the response carried no bytes."""

    def __init__(self, message: str = "No data in response") -> None:
        super().__init__(message, error_code="no_data")


class DecodeError(ServiceHandlerError):
    """The response body did not parse into the expected type.

    The pydantic error is kept on ``original`` and chained as ``__cause__``.
    """

    def __init__(self, original: ValidationError) -> None:
        super().__init__(str(original), error_code="decode_error")
        self.original = original


class RequestEncodingError(ServiceHandlerError):
    """The request payload could not be serialised to JSON."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="encoding_error")


class GraphQLError(ServiceHandlerError):
    """The GraphQL envelope carried a non-empty ``errors`` list."""

    def __init__(self, errors: Sequence[GraphQLErrorMessage]) -> None:
        super().__init__(", ".join(error.message for error in errors), error_code="graphql_error")
        self.errors: List[GraphQLErrorMessage] = list(errors)


class UnknownResponseError(ServiceHandlerError):
    """The GraphQL envelope had neither data nor errors."""

    def __init__(self, message: str = "Unknown error") -> None:
        super().__init__(message, error_code="unknown_error")
