"""
Provider-specific exceptions.

This module defines the classified errors raised by translation providers.
HTTP outcomes from either back-end map onto the same set of classes.
"""

from typing import Optional

from ..exceptions import ErrorCode, TranslationError, UnknownError


class ProviderError(TranslationError):
    """Base exception for remote provider failures."""
    pass


class InvalidApiKeyError(ProviderError):
    """Raised on HTTP 401."""
    code = ErrorCode.INVALID_API_KEY


class RateLimitError(ProviderError):
    """Raised on HTTP 429."""
    code = ErrorCode.RATE_LIMIT


class InvalidRequestError(ProviderError):
    """Raised on HTTP 400, usually a bad model name or oversized request."""
    code = ErrorCode.INVALID_REQUEST


class NetworkError(ProviderError):
    """Raised when the request never produced an HTTP response."""
    code = ErrorCode.NETWORK_ERROR


class ApiError(ProviderError):
    """Raised on any other non-2xx status."""
    code = ErrorCode.API_ERROR


class UnknownProviderError(ProviderError, UnknownError):
    """Raised when a response cannot be interpreted."""
    code = ErrorCode.UNKNOWN_ERROR


def error_for_status(status_code: int, provider_label: str, detail: str) -> ProviderError:
    """Build the classified error for a non-2xx HTTP status.

    Args:
        status_code: HTTP status code
        provider_label: Display name of the provider ("Anthropic", "OpenAI")
        detail: Error message extracted from the response body

    Returns:
        ProviderError subclass instance
    """
    if status_code == 401:
        return InvalidApiKeyError(
            f"Invalid API token. Please check your {provider_label} API key in Settings.",
            status_code=401
        )
    if status_code == 429:
        return RateLimitError(
            "Rate limit exceeded. Please try again in a few moments.",
            status_code=429
        )
    if status_code == 400:
        return InvalidRequestError(
            f"Invalid request: {detail}. Please check your model selection.",
            status_code=400
        )
    return ApiError(
        f"API error ({status_code}): {detail}",
        status_code=status_code
    )


def network_error(cause: Optional[BaseException] = None) -> NetworkError:
    """Build the error raised for transport-level failures."""
    context = {'cause': repr(cause)} if cause is not None else None
    return NetworkError("Network error. Please check your internet connection.", context=context)
