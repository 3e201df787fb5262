"""
Translation provider package.

Two remote back-ends (Anthropic, OpenAI) behind one TranslationProvider
interface with a shared error taxonomy.
"""

from .base import TranslationProvider, ProviderRequest
from .factory import Provider, create_provider
from .exceptions import (
    ProviderError,
    InvalidApiKeyError,
    RateLimitError,
    InvalidRequestError,
    NetworkError,
    ApiError,
    UnknownProviderError,
)

__all__ = [
    'TranslationProvider',
    'ProviderRequest',
    'Provider',
    'create_provider',
    'ProviderError',
    'InvalidApiKeyError',
    'RateLimitError',
    'InvalidRequestError',
    'NetworkError',
    'ApiError',
    'UnknownProviderError',
]
