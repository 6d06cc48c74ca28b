"""Async HTTP clients."""

from .graphql import GraphQLClient
from .multipart import build_multipart_body
from .rest import RestClient

__all__ = [
    "GraphQLClient",
    "RestClient",
    "build_multipart_body",
]
