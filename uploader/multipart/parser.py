"""Single-file multipart/form-data upload parsing.

Composes boundary location, part extraction, header parsing and filename
sanitization. Every step either succeeds or raises its own ``UploadError``
subclass; nothing here touches the filesystem.
"""

from beartype import beartype

from uploader.core.errors import NotMultipart
from uploader.core.logger import LogIcon, logger
from uploader.models.core import ParsedPart, UploadResult
from uploader.multipart.boundary import locate, parse_boundary
from uploader.multipart.extractor import extract_part
from uploader.multipart.headers import disposition_of, filename_for_field, parse_headers
from uploader.multipart.sanitizer import sanitize

MULTIPART_FORM_DATA = "multipart/form-data"
DEFAULT_FIELD_NAME = "myFile"
DEFAULT_FILENAME = "untitled"


@beartype
def parse_part(
    content_type: str | None,
    body: bytes,
    *,
    field_name: str = DEFAULT_FIELD_NAME,
    default_filename: str = DEFAULT_FILENAME,
) -> ParsedPart:
    """Parse the single part of an upload, leaving the filename unsanitized."""
    if not content_type or not content_type.startswith(MULTIPART_FORM_DATA):
        raise NotMultipart()

    boundary = parse_boundary(content_type)
    span = locate(body, boundary)
    raw_headers, payload = extract_part(body, span)

    disposition = disposition_of(parse_headers(raw_headers.decode("utf-8", errors="replace")))
    filename = filename_for_field(disposition, field_name)
    if filename is None:
        logger.warning(
            "Could not extract filename from Content-Disposition, using default",
            icon=LogIcon.WARNING,
            default=default_filename,
        )
        filename = default_filename

    return ParsedPart(
        field_name=disposition.field_name if disposition else None,
        filename=filename,
        payload=payload,
    )


@beartype
def handle_upload(
    content_type: str | None,
    body: bytes,
    *,
    field_name: str = DEFAULT_FIELD_NAME,
    default_filename: str = DEFAULT_FILENAME,
) -> UploadResult:
    """Turn a Content-Type header and raw body into a safe filename and payload."""
    part = parse_part(content_type, body, field_name=field_name, default_filename=default_filename)
    return UploadResult(filename=sanitize(part.filename), payload=part.payload)
