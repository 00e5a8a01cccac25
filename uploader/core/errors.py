"""Error hierarchy for upload parsing and storage."""

from enum import StrEnum

from robyn import status_codes


class ErrorKind(StrEnum):
    """Machine-readable error categories."""

    NOT_MULTIPART = "not_multipart"
    MISSING_BOUNDARY = "missing_boundary"
    BOUNDARY_NOT_FOUND = "boundary_not_found"
    MALFORMED_PART = "malformed_part"
    NO_HEADER_TERMINATOR = "no_header_terminator"
    INVALID_FILENAME_ENCODING = "invalid_filename_encoding"
    STORAGE = "storage"


class UploadError(Exception):
    """Base class for request parsing failures. Always the client's fault."""

    kind: ErrorKind
    message: str = "Bad Request"
    status_code: int = status_codes.HTTP_400_BAD_REQUEST

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotMultipart(UploadError):
    kind = ErrorKind.NOT_MULTIPART
    message = "Bad Request: Expected multipart/form-data"


class MissingBoundary(UploadError):
    kind = ErrorKind.MISSING_BOUNDARY
    message = "Bad Request: Missing boundary in Content-Type"


class BoundaryNotFound(UploadError):
    kind = ErrorKind.BOUNDARY_NOT_FOUND
    message = "Error: Could not find multipart boundary."


class MalformedPart(UploadError):
    kind = ErrorKind.MALFORMED_PART
    message = "Error: Malformed multipart part (empty part)."


class NoHeaderTerminator(UploadError):
    kind = ErrorKind.NO_HEADER_TERMINATOR
    message = "Error: Malformed multipart part (no double CRLF)."


class InvalidFilenameEncoding(UploadError):
    kind = ErrorKind.INVALID_FILENAME_ENCODING
    message = "Error: Filename is not a valid URI component."


class StorageError(Exception):
    """Raised when an upload cannot be written. Never the client's fault."""

    kind = ErrorKind.STORAGE
    message = "Error saving file."
    status_code: int = status_codes.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)
