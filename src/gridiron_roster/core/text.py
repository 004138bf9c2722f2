from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")


def normalize_name(value: str) -> str:
    """Lowercase a person's name and collapse whitespace for cache keys and matching."""

    return _whitespace_re.sub(" ", value.strip().lower())


def first_non_empty(*values: object) -> str:
    """Return the first value that is a non-blank string, stripped, else ''."""

    for v in values:
        if isinstance(v, str) and v.strip():
            return v.strip()
    return ""
