"""
Application error types.

Upstream collaborators (Sheets, Calendar, Drive, Resend) raise subclasses of
ExternalServiceError. Handlers that treat a collaborator as best-effort catch
these, log them and carry on; everything else bubbles up to the exception
handlers registered in app.main.
"""

from typing import Optional


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    EXTERNAL_SERVICE = "external_service_error"
    AUTHENTICATION = "authentication_error"
    NOT_FOUND = "not_found_error"
    CONFIGURATION = "configuration_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AppError):
    """Missing or inconsistent deployment configuration"""
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            status_code=status_code,
        )


class ExternalServiceError(AppError):
    """External service errors (Google APIs, Resend)"""
    def __init__(self, message: str, service: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.EXTERNAL_SERVICE,
            status_code=502,
            details={"service": service, **(details or {})},
        )


class SheetsError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, service="sheets", details=details)


class CalendarError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, service="calendar", details=details)


class DriveError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, service="drive", details=details)


class EmailError(ExternalServiceError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, service="email", details=details)
