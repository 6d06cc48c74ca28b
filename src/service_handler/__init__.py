"""Async REST and GraphQL client helpers built on httpx and pydantic."""

from service_handler.clients import GraphQLClient, RestClient
from service_handler.config import PACKAGE_VERSION as __version__
from service_handler.exceptions import (
    DecodeError,
    EmptyBodyError,
    GraphQLError,
    InvalidURLError,
    RequestEncodingError,
    ServiceHandlerError,
    TransportError,
    UnknownResponseError,
)
from service_handler.models import GraphQLRequest, GraphQLResponse, HttpMethod, MediaFile

__all__ = [
    "DecodeError",
    "EmptyBodyError",
    "GraphQLClient",
    "GraphQLError",
    "GraphQLRequest",
    "GraphQLResponse",
    "HttpMethod",
    "InvalidURLError",
    "MediaFile",
    "RequestEncodingError",
    "RestClient",
    "ServiceHandlerError",
    "TransportError",
    "UnknownResponseError",
    "__version__",
]
