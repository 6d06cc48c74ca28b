"""Request and response models shared by the REST and GraphQL clients."""

from __future__ import annotations

import math
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_MIME_TYPE = "application/octet-stream"


class HttpMethod(str, Enum):
    """HTTP methods supported by the clients."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class MediaFile:
    """A single file part of a multipart upload."""

    field_name: str
    file_name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, field_name: str, path: Union[str, Path], mime_type: Optional[str] = None) -> "MediaFile":
        """Read ``path`` into a media file, guessing the MIME type from its name if not given."""
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or DEFAULT_MIME_TYPE
        return cls(field_name=field_name, file_name=path.name, mime_type=mime_type, data=path.read_bytes())


def _check_finite(value: Any) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Out of range float values are not JSON compliant: {value!r}")
    if isinstance(value, dict):
        for item in value.values():
            _check_finite(item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _check_finite(item)


class GraphQLRequest(BaseModel):
    """Outgoing GraphQL payload.

    Variables may hold values of different types; pydantic serialises each one
    using its own type (models, dataclasses, datetimes, enums and plain JSON
    values alike). NaN and infinities are refused rather than sent as null.
    """

    query: str
    variables: Optional[Dict[str, Any]] = None

    def to_json(self) -> bytes:
        """Serialise to compact JSON, omitting ``variables`` when it is not set.

        Raises:
            ValueError: If a value cannot be represented in JSON.
        """
        if self.variables is None:
            return self.model_dump_json(include={"query"}).encode("utf-8")
        _check_finite(self.model_dump(include={"variables"})["variables"])
        return self.model_dump_json().encode("utf-8")


class GraphQLErrorMessage(BaseModel):
    """One entry of a GraphQL ``errors`` list.

    Only ``message`` is required; the other standard keys are passed through
    in whatever shape the server sends them.
    """

    message: str
    locations: Optional[Any] = None
    path: Optional[Any] = None
    extensions: Optional[Any] = None


class GraphQLResponse(BaseModel, Generic[T]):
    """The ``{data, errors}`` envelope of a GraphQL response."""

    data: Optional[T] = None
    errors: Optional[List[GraphQLErrorMessage]] = None
