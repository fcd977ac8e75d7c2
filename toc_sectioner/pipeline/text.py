"""Whitespace canonicalisation shared by titles and page text."""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Collapse every whitespace run (newlines and tabs included) to one space."""
    return _WHITESPACE_RE.sub(" ", text)
