# app/utils/reservation_number.py
"""
Attendee-facing reservation numbers, e.g. "2502-k3x9".

The first four digits are the seminar's YYMM; the suffix is derived from the
seminar id and the booking sequence so that numbers differ across seminars
held in the same month.
"""

import hashlib
import re
import string

from app.utils.datetime_utils import parse_local_datetime

_ALPHABET = string.digits + string.ascii_lowercase
_FORMAT_RE = re.compile(r"^\d{4}-[0-9a-z]{4}$")
SUFFIX_LENGTH = 4


def _base36(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        value, remainder = divmod(value, 36)
        chars.append(_ALPHABET[remainder])
    return "".join(reversed(chars))


def generate_reservation_number(seminar_date: str, seminar_id: str, sequence: int) -> str:
    start = parse_local_datetime(seminar_date)
    prefix = start.strftime("%y%m") if start else "0000"
    digest = hashlib.sha256(f"{seminar_id}:{sequence}".encode("utf-8")).digest()
    suffix = _base36(int.from_bytes(digest[:8], "big"), SUFFIX_LENGTH)
    return f"{prefix}-{suffix}"


def normalize_reservation_number(value: str) -> str:
    return (value or "").strip().lower()


def is_valid_reservation_number(value: str) -> bool:
    return bool(_FORMAT_RE.match(normalize_reservation_number(value)))
