"""Filename sanitization."""

import re

from beartype import beartype

DISALLOWED = re.compile(r"[^A-Za-z0-9._-]")
REPLACEMENT = "_"


@beartype
def sanitize(raw: str) -> str:
    """Replace every character outside ``[A-Za-z0-9._-]`` with an underscore."""
    return DISALLOWED.sub(REPLACEMENT, raw)
