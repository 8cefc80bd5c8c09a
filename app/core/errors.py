from typing import Optional

from fastapi import status


class GatewayError(Exception):
    """Base error rendered as ``{"ok": false, "error": message}``."""

    kind = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class RejectedQuery(GatewayError):
    kind = "RejectedQuery"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "only read queries permitted"


class DatabaseError(GatewayError):
    kind = "DatabaseError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "database error"


class NotFound(GatewayError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class ConfigurationError(Exception):
    """Raised at startup when a connection profile cannot be assembled."""
