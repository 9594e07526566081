# app/core/security.py
"""
Admin session tokens.

Stateless HS256 JWTs carried in the httpOnly `admin_token` cookie. A token
may carry a `tenant` claim; without one it is a token for the default
(non-tenant) deployment.
"""

import hmac
import time
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.token import AdminTokenPayload

ALGORITHM = "HS256"
ADMIN_COOKIE_NAME = "admin_token"
ADMIN_TOKEN_TTL_SECONDS = 24 * 60 * 60


def create_admin_token(
    secret: str, tenant: Optional[str] = None, now: Optional[int] = None
) -> str:
    issued_at = int(now if now is not None else time.time())
    claims = {
        "role": "admin",
        "iat": issued_at,
        "exp": issued_at + ADMIN_TOKEN_TTL_SECONDS,
    }
    if tenant:
        claims["tenant"] = tenant
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def verify_admin_token(token: str, secret: str) -> Optional[AdminTokenPayload]:
    """Return the decoded claims, or None when the token is invalid or expired."""
    if not token or not secret:
        return None
    try:
        # jose checks the signature and the exp claim
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        claims = AdminTokenPayload(**payload)
    except (JWTError, ValidationError):
        return None
    if claims.role != "admin":
        return None
    return claims


def passwords_match(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def get_jwt_secret() -> str:
    return settings.ADMIN_JWT_SECRET
