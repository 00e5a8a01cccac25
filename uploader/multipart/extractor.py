"""Slicing of a multipart body into header block and payload."""

from uploader.core.errors import MalformedPart, NoHeaderTerminator
from uploader.models.core import BoundarySpan

CRLF = b"\r\n"
DOUBLE_CRLF = CRLF + CRLF


def extract(body: bytes, span: BoundarySpan) -> bytes:
    """Return the bytes between the opening delimiter line and the closing delimiter."""
    if span.end <= span.content_start:
        raise MalformedPart()
    return body[span.content_start:span.end]


def split_headers_and_body(raw_part: bytes) -> tuple[bytes, bytes]:
    """Split a part at its first blank line into (header block, payload)."""
    headers_end = raw_part.find(DOUBLE_CRLF)
    if headers_end == -1:
        raise NoHeaderTerminator()
    return raw_part[:headers_end], raw_part[headers_end + len(DOUBLE_CRLF):]


def extract_part(body: bytes, span: BoundarySpan) -> tuple[bytes, bytes]:
    """Return (header block, payload) of the part delimited by ``span``.

    The CRLF right before the closing delimiter belongs to the delimiter,
    so it is removed from the payload once the headers are split off.
    """
    headers, payload = split_headers_and_body(extract(body, span))
    return headers, payload.removesuffix(CRLF)
