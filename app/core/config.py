# app/core/config.py

import json
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Seminar Registration Service"
    LOG_LEVEL: str = "INFO"

    # Public base URL used to build links in emails (survey, manage page)
    APP_URL: str = "http://localhost:3000"

    # CORS - comma-separated string or JSON array, parsed via get_cors_origins()
    CORS_ORIGINS: Optional[str] = None

    # --- Google service account ---
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = ""
    GOOGLE_PRIVATE_KEY: str = ""
    GOOGLE_PRIVATE_KEY_ID: str = ""
    # Optional domain-wide delegation subject (needed for Meet link generation)
    GOOGLE_IMPERSONATE_EMAIL: Optional[str] = None
    GOOGLE_CALENDAR_ID: str = "primary"

    # Default (non-tenant) master spreadsheet and Drive folder
    GOOGLE_SPREADSHEET_ID: str = ""
    GOOGLE_DRIVE_FOLDER_ID: str = ""

    HTTP_TIMEOUT_SECONDS: float = 15.0

    # --- Admin auth ---
    ADMIN_PASSWORD: str = ""
    ADMIN_JWT_SECRET: str = ""
    ADMIN_COOKIE_SECURE: bool = False

    # --- Email (Resend) ---
    RESEND_API_KEY: Optional[str] = None
    RESEND_FROM_EMAIL: str = "onboarding@resend.dev"
    EMAIL_FROM_NAME: str = "Alliance Forum"

    # --- Tenants ---
    TENANT_WHGC_SEMINARS_MASTER_SPREADSHEET_ID: str = ""
    TENANT_WHGC_SEMINARS_DRIVE_FOLDER_ID: str = ""
    TENANT_WHGC_SEMINARS_ADMIN_PASSWORD: str = ""

    TENANT_KGRI_PIC_CENTER_MASTER_SPREADSHEET_ID: str = ""
    TENANT_KGRI_PIC_CENTER_DRIVE_FOLDER_ID: str = ""
    TENANT_KGRI_PIC_CENTER_ADMIN_PASSWORD: str = ""

    TENANT_AFF_EVENTS_MASTER_SPREADSHEET_ID: str = ""
    TENANT_AFF_EVENTS_DRIVE_FOLDER_ID: str = ""
    TENANT_AFF_EVENTS_ADMIN_PASSWORD: str = ""

    TENANT_PIC_COURSES_MASTER_SPREADSHEET_ID: str = ""
    TENANT_PIC_COURSES_DRIVE_FOLDER_ID: str = ""
    TENANT_PIC_COURSES_ADMIN_PASSWORD: str = ""

    @field_validator("APP_URL")
    @classmethod
    def clean_app_url(cls, v: str) -> str:
        """Take only the first URL if comma-separated, and strip trailing slashes."""
        return v.split(",")[0].strip().rstrip("/")

    @field_validator("GOOGLE_PRIVATE_KEY")
    @classmethod
    def unescape_private_key(cls, v: str) -> str:
        # Keys pasted into .env files usually carry literal "\n" sequences
        return v.replace("\\n", "\n")

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string or JSON array"""
        if not self.CORS_ORIGINS:
            return ["http://localhost:3000"]
        v = self.CORS_ORIGINS.strip()
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Singleton instance for direct imports
settings = get_settings()
