"""Error Hierarchy: typed, categorized exceptions for all board failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry no server-side effect
    - Storage errors (500-level) expose the underlying store message
    - to_response() produces the wire envelope {"error": str, "details"?: ...}
"""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    MALFORMED_REQUEST = "malformed_request"
    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    STORAGE = "storage"
    INTERNAL = "internal"


class BoardError(Exception):
    """Base exception for all board errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class MalformedRequestError(BoardError):
    """Request body could not be parsed as JSON."""
    def __init__(self, message: str = "Invalid JSON"):
        super().__init__(
            message, "MALFORMED_REQUEST", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, 400,
        )


class PayloadValidationError(BoardError):
    """Body parsed but violated field or structure constraints."""
    def __init__(self, details: dict):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, details,
        )


class ForbiddenError(BoardError):
    """Elevated-privilege path requested but not configured."""
    def __init__(self, message: str = "Service role is not configured"):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(BoardError):
    """Database operation failed. Message is the store's own message."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
