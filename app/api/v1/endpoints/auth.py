# app/api/v1/endpoints/auth.py
import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api import deps
from app.core.config import settings
from app.core.errors import ConfigurationError
from app.core.security import (
    ADMIN_COOKIE_NAME,
    ADMIN_TOKEN_TTL_SECONDS,
    create_admin_token,
    get_jwt_secret,
    passwords_match,
)
from app.core.tenants import TenantConfig
from app.schemas.token import AdminTokenPayload, LoginRequest, SessionInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=SessionInfo)
def login(
    login_in: LoginRequest,
    response: Response,
    tenant: TenantConfig = Depends(deps.get_tenant),
):
    """
    Exchange the admin password for an httpOnly session cookie.

    Tenant sites use their own password; the default site uses ADMIN_PASSWORD.
    """
    expected = tenant.admin_password
    secret = get_jwt_secret()
    if not expected or not secret:
        raise ConfigurationError("Admin authentication is not configured")

    if not passwords_match(login_in.password, expected):
        logger.warning(f"Failed admin login for tenant {tenant.key!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password"
        )

    now = int(time.time())
    token = create_admin_token(secret, tenant=tenant.key, now=now)
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        max_age=ADMIN_TOKEN_TTL_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.ADMIN_COOKIE_SECURE,
    )
    return SessionInfo(
        authenticated=True, tenant=tenant.key, expires_at=now + ADMIN_TOKEN_TTL_SECONDS
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout():
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(key=ADMIN_COOKIE_NAME, path="/")
    return response


@router.get("/session", response_model=SessionInfo)
def read_session(admin: AdminTokenPayload = Depends(deps.require_admin)):
    return SessionInfo(authenticated=True, tenant=admin.tenant, expires_at=admin.exp)
