from typing import Any, Mapping, Optional


class _CoffeeTrackerError(Exception):
    """Shared shape for application errors: message, optional details and code."""

    default_message = "Application error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(_CoffeeTrackerError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(_CoffeeTrackerError):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404
    default_message = "Not found"


class ConflictError(_CoffeeTrackerError):
    """Raised when a resource conflict occurs (e.g., duplicate collection name).

    Attributes are similar to ServiceValidationError. http_status is 409.
    """

    http_status = 409
    default_message = "Conflict"


class ConfigurationError(_CoffeeTrackerError):
    """Raised at startup when required configuration (credentials, connection target) is missing."""

    default_message = "Missing configuration"


class SchemaMigrationError(_CoffeeTrackerError):
    """Raised when a schema migration statement fails; the remaining steps are not executed."""

    default_message = "Schema migration failed"


class RollbackNotSupportedError(_CoffeeTrackerError):
    """Raised by every rollback entry point: migrations keep no change log to reverse."""

    default_message = "Rollback not implemented - restore from backup"
