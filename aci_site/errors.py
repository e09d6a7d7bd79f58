"""Request-level errors rendered as JSON by the app's error handler."""


class SiteError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class ValidationError(SiteError):
    """Missing or malformed required field (client fault)."""

    status_code = 400
    default_message = "Missing required fields"


class NotFoundError(SiteError):
    status_code = 404
    default_message = "Not found"


class PersistenceError(SiteError):
    """Store reachable but the write/read was rejected. Message never carries store internals."""

    status_code = 500
    default_message = "Failed to submit form"


class ConfigurationError(SiteError):
    """Store unreachable or schema missing. Handlers normally absorb this into a soft success."""

    status_code = 503
    default_message = "Database not configured"


class InternalError(SiteError):
    status_code = 500
    default_message = "Internal server error"
