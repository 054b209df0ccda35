"""
errors.py - Error Code System

Structured errors for localstack-mcp.

Error Code Structure:
- 4xxx: Storage errors (snapshot files)
- 9xxx: External errors (LocalStack)

Usage:
    from localstack_mcp.errors import EmulatorUnavailableError

    raise EmulatorUnavailableError(endpoint="http://localhost:4566")
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """Error category classification."""

    STORAGE = "STORAGE"
    EXTERNAL = "EXTERNAL"
    UNKNOWN = "UNKNOWN"


def _infer_category_from_code(code: str) -> ErrorCategory:
    """Infer error category from error code prefix."""
    if not code or len(code) < 2:
        return ErrorCategory.UNKNOWN

    category_map = {
        "4": ErrorCategory.STORAGE,
        "9": ErrorCategory.EXTERNAL,
    }
    return category_map.get(code[0], ErrorCategory.UNKNOWN)


class ErrorCode(str, Enum):
    """Error codes for localstack-mcp."""

    # Storage Errors (4xxx)
    SNAPSHOT_READ_ERROR = "4001"
    SNAPSHOT_WRITE_ERROR = "4002"
    SNAPSHOT_PARSE_ERROR = "4003"

    # External Errors (9xxx)
    EMULATOR_UNAVAILABLE = "9001"


class LocalStackMCPError(Exception):
    """Base exception for localstack-mcp errors.

    Attributes:
        message: Human-readable error description
        code: Error code from ErrorCode
        category: Error category from ErrorCategory
        details: Additional error context dictionary
    """

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code

        if category == ErrorCategory.UNKNOWN and code:
            category = _infer_category_from_code(code.value)

        self.category = category
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"code={self.code.value if self.code else None!r}, "
            f"category={self.category.value!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary format."""
        return {
            "message": self.message,
            "code": self.code.value if self.code else None,
            "category": self.category.value,
            "details": self.details,
        }


class EmulatorUnavailableError(LocalStackMCPError):
    """LocalStack did not answer its health endpoint."""

    MESSAGE = "LocalStack is not accessible. Ensure container is running and healthy."

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        super().__init__(
            message=self.MESSAGE,
            code=ErrorCode.EMULATOR_UNAVAILABLE,
            details={"endpoint": endpoint, "reason": reason},
        )


class SnapshotFileError(LocalStackMCPError):
    """A snapshot file could not be read, parsed or written."""

    def __init__(
        self,
        message: str,
        path: str,
        code: ErrorCode = ErrorCode.SNAPSHOT_READ_ERROR,
    ):
        super().__init__(message=message, code=code, details={"path": path})
        self.path = path


__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "LocalStackMCPError",
    "EmulatorUnavailableError",
    "SnapshotFileError",
]
