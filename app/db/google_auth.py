# app/db/google_auth.py
"""
Service-account access tokens for the Google REST APIs.

One token covers Sheets, Calendar and Drive. It is cached at module level and
refreshed once it is within 60 seconds of expiry.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

import google.auth.transport.requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from app.core.config import settings
from app.core.errors import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/drive",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"
EXPIRY_MARGIN = timedelta(seconds=60)

_lock = threading.Lock()
_credentials: Optional[service_account.Credentials] = None


def _build_credentials() -> service_account.Credentials:
    missing = [
        name
        for name, value in (
            ("GOOGLE_SERVICE_ACCOUNT_EMAIL", settings.GOOGLE_SERVICE_ACCOUNT_EMAIL),
            ("GOOGLE_PRIVATE_KEY", settings.GOOGLE_PRIVATE_KEY),
            ("GOOGLE_PRIVATE_KEY_ID", settings.GOOGLE_PRIVATE_KEY_ID),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Google credentials are not configured: {', '.join(missing)}")

    info = {
        "type": "service_account",
        "client_email": settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
        "private_key": settings.GOOGLE_PRIVATE_KEY,
        "private_key_id": settings.GOOGLE_PRIVATE_KEY_ID,
        "token_uri": TOKEN_URI,
    }
    credentials = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    if settings.GOOGLE_IMPERSONATE_EMAIL:
        # Domain-wide delegation; Meet links are only generated for a real user
        credentials = credentials.with_subject(settings.GOOGLE_IMPERSONATE_EMAIL)
    return credentials


def _is_fresh(credentials: service_account.Credentials) -> bool:
    if not credentials.token or credentials.expiry is None:
        return False
    # google-auth keeps expiry as a naive UTC datetime
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return credentials.expiry - EXPIRY_MARGIN > now


def get_access_token() -> str:
    global _credentials

    with _lock:
        if _credentials is None:
            _credentials = _build_credentials()
        if not _is_fresh(_credentials):
            try:
                _credentials.refresh(google.auth.transport.requests.Request())
            except GoogleAuthError as e:
                logger.error(f"Failed to obtain Google access token: {e}")
                raise ExternalServiceError(
                    "Failed to obtain Google access token", service="google-auth"
                ) from e
            logger.debug(f"Refreshed Google access token, expires {_credentials.expiry}")
        return _credentials.token


def reset_token_cache() -> None:
    global _credentials
    with _lock:
        _credentials = None
