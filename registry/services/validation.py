"""Input coercion helpers shared by the repositories and endpoints."""
from __future__ import annotations

import re
from typing import Any, Optional

from eth_utils import is_address

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_valid_address(value: Any) -> bool:
    """Return True for a syntactically valid account address.

    Mixed-case input must carry a valid EIP-55 checksum.
    """

    return isinstance(value, str) and is_address(value)


def normalize_address(value: str) -> str:
    return value.strip().lower()


def parse_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Leniently parse an integer: ``"12abc"`` is 12, ``"abc"`` is ``default``."""

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    return int(match.group(1))


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
