# app/services/google_api.py
"""Shared transport for the Calendar and Drive REST clients."""

import logging
from typing import Callable, Optional, Type

import httpx

from app.core.errors import ExternalServiceError
from app.db.google_auth import get_access_token

logger = logging.getLogger(__name__)


class GoogleApiClient:
    error_class: Type[ExternalServiceError] = ExternalServiceError
    service_name = "google"

    def __init__(
        self,
        http: httpx.Client,
        token_provider: Callable[[], str] = get_access_token,
    ):
        self.http = http
        self.token_provider = token_provider

    def _request(
        self,
        method: str,
        url: str,
        action: str,
        allow_status: Optional[set] = None,
        **kwargs,
    ) -> dict:
        headers = {"Authorization": f"Bearer {self.token_provider()}"}
        headers.update(kwargs.pop("headers", {}))
        try:
            response = self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{self.service_name} request failed ({action}): {e}")
            raise self.error_class(f"Failed to {action}") from e
        if response.is_error and response.status_code not in (allow_status or set()):
            logger.error(
                f"{self.service_name} API error ({action}): "
                f"HTTP {response.status_code} {response.text}"
            )
            raise self.error_class(
                f"Failed to {action}", details={"status": response.status_code}
            )
        if response.is_error or not response.content:
            return {}
        return response.json()
