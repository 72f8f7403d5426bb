"""Whitespace normalization for scraped strings."""

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def clean(value: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and strip the ends."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()
