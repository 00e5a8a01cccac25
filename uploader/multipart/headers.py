"""Part header tokenizer and Content-Disposition parsing.

A part's header block is a sequence of ``Name: value`` lines separated by
CRLF. Only ``Content-Disposition`` carries meaning for uploads::

    Content-Disposition: form-data; name="myFile"; filename="report%20v2.pdf"

Parameters are split on ``;`` outside double quotes. Quoted values end at the
next double quote (no backslash escapes), so a parameter whose quote never
closes is dropped rather than guessed at.
"""

import re
from urllib.parse import unquote_to_bytes

from uploader.core.errors import InvalidFilenameEncoding
from uploader.models.core import Disposition, PartHeaders

CONTENT_DISPOSITION = "content-disposition"
FORM_DATA = "form-data"

_LINE_SPLIT = re.compile(r"\r\n|\n")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_headers(header_block: str) -> PartHeaders:
    items: list[tuple[str, str]] = []
    for line in _LINE_SPLIT.split(header_block):
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            continue
        items.append((name.strip(), value.strip()))
    return PartHeaders(items)


def _split_params(value: str) -> list[str]:
    """Split on semicolons that are not inside a quoted string."""
    tokens: list[str] = []
    current: list[str] = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        if char == ";" and not quoted:
            tokens.append("".join(current))
            current = []
            continue
        current.append(char)
    tokens.append("".join(current))
    return tokens


def _parse_param(token: str) -> tuple[str, str] | None:
    key, sep, raw = token.partition("=")
    key = key.strip().lower()
    if not sep or not key:
        return None

    raw = raw.strip()
    if raw.startswith('"'):
        closing = raw.find('"', 1)
        if closing == -1:
            return None
        return key, raw[1:closing]
    return key, raw


def parse_disposition(value: str) -> Disposition:
    """Parse a Content-Disposition header value into its type and parameters."""
    disposition_type, *param_tokens = _split_params(value)
    params: dict[str, str] = {}
    for token in param_tokens:
        if (param := _parse_param(token)) is not None:
            params.setdefault(*param)
    return Disposition(type=disposition_type.strip().lower(), params=params)


def decode_uri_component(value: str) -> str:
    """Percent-decode ``value`` strictly, as browsers' decodeURIComponent does."""
    if _BAD_PERCENT.search(value):
        raise InvalidFilenameEncoding()
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError as ex:
        raise InvalidFilenameEncoding() from ex


def disposition_of(headers: PartHeaders) -> Disposition | None:
    if CONTENT_DISPOSITION not in headers:
        return None
    return parse_disposition(headers[CONTENT_DISPOSITION])


def filename_for_field(disposition: Disposition | None, field_name: str) -> str | None:
    """Return the decoded filename when the disposition declares ``field_name``.

    Field names compare case-insensitively. A missing or empty filename, another
    field or a non form-data disposition all yield ``None``.
    """
    if disposition is None or disposition.type != FORM_DATA:
        return None
    if (disposition.field_name or "").lower() != field_name.lower():
        return None
    if disposition.filename is None:
        return None
    return decode_uri_component(disposition.filename)


def extract_filename(header_block: str, field_name: str) -> str | None:
    return filename_for_field(disposition_of(parse_headers(header_block)), field_name)
