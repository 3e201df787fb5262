"""
Exception hierarchy for the translation core.

Every failure surfaced to callers is a TranslationError carrying a stable
ErrorCode, so the caller can branch on the code and show the message as-is.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Stable error codes exposed to callers."""

    # Configuration
    MISSING_PROVIDER = "MISSING_PROVIDER"
    MISSING_API_KEY = "MISSING_API_KEY"
    MISSING_MODEL = "MISSING_MODEL"
    DECRYPTION_ERROR = "DECRYPTION_ERROR"

    # Archive
    EPUB_LOAD_ERROR = "EPUB_LOAD_ERROR"
    EMPTY_EPUB = "EMPTY_EPUB"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    SECTION_LOAD_ERROR = "SECTION_LOAD_ERROR"

    # Provider / transport
    INVALID_API_KEY = "INVALID_API_KEY"
    RATE_LIMIT = "RATE_LIMIT"
    INVALID_REQUEST = "INVALID_REQUEST"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Aggregate
    TOO_MANY_FAILURES = "TOO_MANY_FAILURES"
    NO_SECTIONS_TRANSLATED = "NO_SECTIONS_TRANSLATED"

    # Control
    CANCELLED = "CANCELLED"
    JOB_CONFLICT = "JOB_CONFLICT"


CRITICAL_CODES = frozenset({
    ErrorCode.INVALID_API_KEY,
    ErrorCode.RATE_LIMIT,
    ErrorCode.NETWORK_ERROR,
    ErrorCode.INVALID_REQUEST,
})


class TranslationError(Exception):
    """Base exception for all translation errors.

    Attributes:
        message: Human-readable error message
        code: Classified error code
        status_code: HTTP status for provider errors, if any
        context: Additional context about the error
    """

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.status_code = status_code
        self.context = context or {}

    @property
    def critical(self) -> bool:
        """Critical errors abort the whole run."""
        return self.code in CRITICAL_CODES

    def __str__(self) -> str:
        return self.message


class UnknownError(TranslationError):
    """Raised for failures that match no other classification."""
    code = ErrorCode.UNKNOWN_ERROR
