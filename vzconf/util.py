"""Number and UUID parsing helpers."""

import re
import uuid
from typing import Optional

from .config import INT_MAX

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_UUID_RE = re.compile(r"[0-9a-fA-F-]+")


def parse_int(text: Optional[str], default: Optional[int] = 0) -> Optional[int]:
    """Parse a 32-bit signed decimal integer.

    Leading whitespace is allowed. Returns default for missing text, trailing
    garbage or out-of-range values.
    """
    if text is None:
        return default
    match = _INT_RE.fullmatch(text)
    if not match:
        return default
    value = int(match.group(1))
    if value > INT_MAX or value < -INT_MAX - 1:
        return default
    return value


def parse_ulong(text: Optional[str]) -> Optional[int]:
    """Parse a non-negative decimal integer, or None."""
    if text is None:
        return None
    match = _INT_RE.fullmatch(text)
    if not match or match.group(1).startswith("-"):
        return None
    return int(match.group(1))


def parse_uuid(text: str) -> uuid.UUID:
    """Parse UUID text. Raises ValueError if malformed.

    Accepts 32 hex digits, hyphens optional; braces and urn: prefixes are
    rejected.
    """
    text = text.strip()
    if not text:
        raise ValueError("empty UUID")
    if not _UUID_RE.fullmatch(text):
        raise ValueError(f"malformed UUID '{text}'")
    return uuid.UUID(text)
