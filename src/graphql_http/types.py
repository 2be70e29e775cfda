"""GraphQL types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Generic, TypeVar

import httpx

from .exceptions import GraphQlError

T = TypeVar("T")

DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


@dataclass
class File:
    """A file to upload.

    ``reader`` is consumed once per ``Client.run`` call. The caller owns it
    and is responsible for closing it.
    """

    field: str
    name: str
    reader: IO[bytes] | bytes
    content_type: str = DEFAULT_FILE_CONTENT_TYPE


class Request:
    """GraphQL request.

    Files are only supported with a Client configured for one of the
    multipart modes.
    """

    def __init__(self, query: str) -> None:
        self._query = query
        self._vars: dict[str, Any] | None = None
        self._files: list[File] = []
        # Headers set on every HTTP request made for this GraphQL request.
        self.headers = httpx.Headers()

    @property
    def query(self) -> str:
        return self._query

    @property
    def variables(self) -> dict[str, Any] | None:
        """Variables set so far, or None when ``var`` was never called."""
        return self._vars

    @property
    def files(self) -> list[File]:
        return self._files

    def var(self, key: str, value: Any) -> None:
        """Set a variable."""
        if self._vars is None:
            self._vars = {}
        self._vars[key] = value

    def file(
        self,
        field: str,
        name: str,
        reader: IO[bytes] | bytes,
        content_type: str = DEFAULT_FILE_CONTENT_TYPE,
    ) -> None:
        """Add a file to upload. Declaration order is preserved."""
        self._files.append(
            File(field=field, name=name, reader=reader, content_type=content_type)
        )

    def __repr__(self) -> str:
        return (
            f"Request(query={self._query!r}, variables={self._vars!r}, "
            f"files={len(self._files)})"
        )


@dataclass
class GraphQlResponse(Generic[T]):
    """GraphQL response envelope."""

    data: T | None = None
    errors: list[GraphQlError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
