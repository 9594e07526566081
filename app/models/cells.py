# app/models/cells.py
"""Best-effort cell readers shared by the row mappers."""

import re
from typing import List

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def cell(row: List[str], index: int) -> str:
    """Cell value as a string; "" when the row is too short."""
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


def to_int(value: str, default: int = 0) -> int:
    """parseInt-style: leading digits win, anything else falls back to the default."""
    match = _LEADING_INT_RE.match(value or "")
    if not match:
        return default
    return int(match.group(1))


def to_flag(value: str) -> bool:
    return (value or "").strip().upper() == "TRUE"


def from_flag(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def column_letter(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA"""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters
