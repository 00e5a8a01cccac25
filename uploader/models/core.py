"""Core models for multipart upload handling."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RawRequest:
    """Content-Type header and fully buffered body of one upload request."""

    content_type: str | None
    body: bytes


@dataclass(frozen=True, slots=True)
class BoundarySpan:
    """Positions of the opening and closing delimiters inside a body."""

    start: int
    end: int
    marker_length: int

    @property
    def content_start(self) -> int:
        # opening marker is followed by its CRLF
        return self.start + self.marker_length + 2


class PartHeaders(Mapping[str, str]):
    """Read-only, case-insensitive view over the headers of one part."""

    __slots__ = ("_headers",)

    def __init__(self, items: list[tuple[str, str]] | None = None) -> None:
        self._headers: dict[str, str] = {}
        for name, value in items or []:
            self._headers.setdefault(name.lower(), value)

    def __getitem__(self, name: str) -> str:
        return self._headers[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"PartHeaders({self._headers})"


@dataclass(frozen=True, slots=True)
class Disposition:
    """Parsed Content-Disposition value."""

    type: str
    params: dict[str, str] = field(default_factory=dict)

    @property
    def field_name(self) -> str | None:
        return self.params.get("name")

    @property
    def filename(self) -> str | None:
        return self.params.get("filename") or None


@dataclass(frozen=True, slots=True)
class ParsedPart:
    """The single meaningful part of an upload, before sanitization."""

    field_name: str | None
    filename: str
    payload: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Sanitized filename and payload, ready for storage."""

    filename: str
    payload: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True, slots=True)
class StoredUpload:
    """Outcome of a successful write to the upload directory."""

    filename: str
    path: Path
    size: int
