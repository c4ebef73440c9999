"""Common utility functions."""

import re
from typing import Mapping

_NON_DIGITS = re.compile(r"\D")


def digits_only(value) -> str:
    """Strip every non-digit character from `value` (None becomes "")."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def first_non_empty(values: Mapping[str, str], *names: str) -> str:
    """Return the first non-empty value among `names`, or ""."""
    for name in names:
        value = values.get(name)
        if value:
            return value
    return ""
