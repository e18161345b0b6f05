"""Whitespace tokenization shared by the counting analyzers."""

from __future__ import annotations

import re
from typing import List

# Code points with the Unicode White_Space property. Unlike str.split(), the
# ASCII information separators 0x1C-0x1F are not word boundaries.
_WHITESPACE = (
    [0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0x85, 0xA0, 0x1680]
    + list(range(0x2000, 0x200B))
    + [0x2028, 0x2029, 0x202F, 0x205F, 0x3000]
)

_FIELD_RE = re.compile("[^" + "".join(re.escape(chr(code)) for code in _WHITESPACE) + "]+")


def split_fields(content: str) -> List[str]:
    """Return the non-empty runs of non-whitespace characters in ``content``."""
    return _FIELD_RE.findall(content)


__all__ = ["split_fields"]
