"""Boundary discovery in Content-Type headers and request bodies."""

import re

from uploader.core.errors import BoundaryNotFound, MissingBoundary
from uploader.models.core import BoundarySpan

# Everything after the first "boundary=" is taken, trailing parameters included.
BOUNDARY_PATTERN = re.compile(r"boundary=(.+)")
CLOSING_SUFFIX = b"--"


def parse_boundary(content_type: str) -> bytes:
    """Return the delimiter bytes (``--`` + boundary parameter) for a Content-Type."""
    match = BOUNDARY_PATTERN.search(content_type)
    if not match:
        raise MissingBoundary()
    return b"--" + match.group(1).encode("utf-8")


def locate(body: bytes, boundary: bytes) -> BoundarySpan:
    """Find the first opening delimiter and the first closing delimiter in ``body``."""
    start = body.find(boundary)
    if start == -1:
        raise BoundaryNotFound("Error: Could not find multipart boundary.")

    end = body.find(boundary + CLOSING_SUFFIX)
    if end == -1:
        raise BoundaryNotFound("Error: Could not find end multipart boundary.")

    return BoundarySpan(start=start, end=end, marker_length=len(boundary))
