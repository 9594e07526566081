# app/utils/survey_token.py
"""
Survey link tokens: unpadded base64url of "seminar_id:reservation_id".

Not a secret, only keeps the raw ids out of the survey URL.
"""

import base64
import binascii
from typing import Optional, Tuple


def encode_survey_token(seminar_id: str, reservation_id: str) -> str:
    payload = f"{seminar_id}:{reservation_id}".encode("utf-8")
    return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")


def decode_survey_token(token: str) -> Optional[Tuple[str, str]]:
    if not token:
        return None
    padded = token + "=" * (-len(token) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        return None
    seminar_id, _, rest = decoded.partition(":")
    reservation_id = rest.split(":")[0]
    if not seminar_id or not reservation_id:
        return None
    return seminar_id, reservation_id
