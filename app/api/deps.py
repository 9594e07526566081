# app/api/deps.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from app.core.errors import ConfigurationError
from app.core.security import ADMIN_COOKIE_NAME, get_jwt_secret, verify_admin_token
from app.core.tenants import TenantConfig, get_default_config, get_tenant_config, is_tenant_key
from app.schemas.token import AdminTokenPayload

logger = logging.getLogger(__name__)


def resolve_tenant(key: Optional[str]) -> TenantConfig:
    """
    Map a tenant key to its configuration.

    No key means the default deployment. Unknown keys are 404 so that
    arbitrary path prefixes do not look like valid sites; a known tenant
    without a master spreadsheet is a deployment problem (503).
    """
    if not key:
        return get_default_config()
    if not is_tenant_key(key):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown tenant")
    config = get_tenant_config(key)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Tenant '{key}' is not configured",
        )
    return config


async def _tenant_from_body(request: Request) -> Optional[str]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            return None
        return data.get("tenant") if isinstance(data, dict) else None
    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        value = form.get("tenant")
        return value if isinstance(value, str) else None
    return None


async def get_tenant(request: Request) -> TenantConfig:
    """Tenant from the path prefix, then ?tenant=, then a "tenant" body field."""
    key = request.path_params.get("tenant") or request.query_params.get("tenant")
    if not key and request.method in ("POST", "PUT", "PATCH", "DELETE"):
        key = await _tenant_from_body(request)
    return resolve_tenant(key or None)


def get_master_id(tenant: TenantConfig = Depends(get_tenant)) -> str:
    if not tenant.master_spreadsheet_id:
        raise ConfigurationError("Master spreadsheet is not configured", status_code=503)
    return tenant.master_spreadsheet_id


def require_admin(
    request: Request, tenant: TenantConfig = Depends(get_tenant)
) -> AdminTokenPayload:
    """
    Admin gate: a valid, unexpired admin_token cookie issued for this tenant.
    A token without a tenant claim only opens the default deployment.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Admin authentication required",
    )
    token = request.cookies.get(ADMIN_COOKIE_NAME)
    if not token:
        raise credentials_exception
    claims = verify_admin_token(token, get_jwt_secret())
    if claims is None:
        raise credentials_exception
    if claims.tenant != tenant.key:
        logger.warning(
            f"Admin token for tenant {claims.tenant!r} used against {tenant.key!r}"
        )
        raise credentials_exception
    return claims
