# app/core/tenants.py
"""
Static tenant registry.

Each tenant gets its own master spreadsheet, Drive folder and admin password,
read from TENANT_<KEY>_* settings. Requests without a tenant use the default
GOOGLE_SPREADSHEET_ID / GOOGLE_DRIVE_FOLDER_ID / ADMIN_PASSWORD.
"""

from dataclasses import dataclass
from typing import Optional

from app.core.config import settings

TENANT_KEYS = (
    "whgc-seminars",
    "kgri-pic-center",
    "aff-events",
    "pic-courses",
)

TENANT_LABELS = {
    "whgc-seminars": "WHGC セミナー",
    "kgri-pic-center": "KGRI PIC センター",
    "aff-events": "AFF イベント",
    "pic-courses": "PIC コース",
}


@dataclass(frozen=True)
class TenantConfig:
    key: Optional[str]
    master_spreadsheet_id: str
    drive_folder_id: str
    admin_password: str

    @property
    def label(self) -> str:
        if self.key is None:
            return settings.EMAIL_FROM_NAME
        return TENANT_LABELS.get(self.key, self.key)

    @property
    def path_prefix(self) -> str:
        """URL segment prepended to attendee-facing links ("" for the default tenant)."""
        return f"/{self.key}" if self.key else ""


def is_tenant_key(value: Optional[str]) -> bool:
    return value in TENANT_KEYS


def env_prefix(key: str) -> str:
    return "TENANT_" + key.upper().replace("-", "_")


def get_tenant_config(key: str) -> Optional[TenantConfig]:
    """Return the tenant's config, or None when the key is unknown or its master is unset."""
    if not is_tenant_key(key):
        return None
    prefix = env_prefix(key)
    master_id = getattr(settings, f"{prefix}_MASTER_SPREADSHEET_ID", "")
    if not master_id:
        return None
    return TenantConfig(
        key=key,
        master_spreadsheet_id=master_id,
        drive_folder_id=getattr(settings, f"{prefix}_DRIVE_FOLDER_ID", "") or "",
        admin_password=getattr(settings, f"{prefix}_ADMIN_PASSWORD", "") or "",
    )


def get_default_config() -> TenantConfig:
    return TenantConfig(
        key=None,
        master_spreadsheet_id=settings.GOOGLE_SPREADSHEET_ID,
        drive_folder_id=settings.GOOGLE_DRIVE_FOLDER_ID,
        admin_password=settings.ADMIN_PASSWORD,
    )
