"""Error taxonomy shared by the gateway and the HTTP layer.

Every error carries the status code and the public message the client sees.
Internal causes are chained with ``raise ... from`` and only ever logged.
"""

from typing import Any, Optional


class TrackerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class Unauthenticated(TrackerError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidRequest(TrackerError):
    status_code = 400
    default_message = "Invalid data"


class NotFound(TrackerError):
    status_code = 404
    default_message = "Not found"


class StorageError(TrackerError):
    status_code = 500
    default_message = "Storage failure"


class InternalError(TrackerError):
    status_code = 500
    default_message = "Internal server error"
