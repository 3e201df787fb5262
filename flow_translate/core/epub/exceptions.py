"""
Custom exceptions for the EPUB translation pipeline.

This module defines the run-level failures: configuration, archive loading,
section handling, aggregate thresholds and cancellation.
"""

from typing import Optional

from ..exceptions import ErrorCode, TranslationError


class EpubTranslationError(TranslationError):
    """Base exception for all EPUB pipeline errors."""
    pass


class ConfigurationError(EpubTranslationError):
    """Base exception for invalid translation configuration."""
    pass


class MissingProviderError(ConfigurationError):
    code = ErrorCode.MISSING_PROVIDER

    def __init__(self, message: str = "AI provider is not configured. Please select a provider in Settings."):
        super().__init__(message)


class MissingApiKeyError(ConfigurationError):
    code = ErrorCode.MISSING_API_KEY

    def __init__(self, message: str = "API token is required for translation. Please configure it in Settings."):
        super().__init__(message)


class MissingModelError(ConfigurationError):
    code = ErrorCode.MISSING_MODEL

    def __init__(self, message: str = "Model is required for translation. Please select a model in Settings."):
        super().__init__(message)


class DecryptionError(EpubTranslationError):
    code = ErrorCode.DECRYPTION_ERROR

    def __init__(self, message: str = "Failed to decrypt API token. Please re-enter your API key in Settings."):
        super().__init__(message)


class EpubLoadError(EpubTranslationError):
    """Raised when the archive cannot be opened or parsed."""
    code = ErrorCode.EPUB_LOAD_ERROR


class EmptyEpubError(EpubTranslationError):
    code = ErrorCode.EMPTY_EPUB

    def __init__(self, message: str = "No content found in ePub file. The file may be corrupted."):
        super().__init__(message)


class SectionLoadError(EpubTranslationError):
    """Raised when a spine section cannot be loaded or parsed.

    Attributes:
        section: Section href
    """
    code = ErrorCode.SECTION_LOAD_ERROR

    def __init__(self, message: str, section: Optional[str] = None):
        super().__init__(message, context={'section': section} if section else None)
        self.section = section


class SectionNotFoundError(EpubTranslationError):
    """Raised when no archive entry matches a section."""
    code = ErrorCode.SECTION_NOT_FOUND

    def __init__(self, section: str):
        super().__init__(f"Could not find path for section: {section}", context={'section': section})
        self.section = section


class TooManyFailuresError(EpubTranslationError):
    """Raised once failed sections exceed the allowed share.

    Attributes:
        failed_sections: Number of failed sections so far
        total_sections: Total sections in the spine
    """
    code = ErrorCode.TOO_MANY_FAILURES

    def __init__(self, failed_sections: int, total_sections: int):
        super().__init__(
            f"Translation failed for more than 50% of sections "
            f"({failed_sections}/{total_sections}). Aborting.",
            context={'failed_sections': failed_sections, 'total_sections': total_sections}
        )
        self.failed_sections = failed_sections
        self.total_sections = total_sections


class NoSectionsTranslatedError(EpubTranslationError):
    code = ErrorCode.NO_SECTIONS_TRANSLATED

    def __init__(self, message: str = "No sections were successfully translated. "
                                      "Please check your settings and try again."):
        super().__init__(message)


class TranslationCancelledError(EpubTranslationError):
    code = ErrorCode.CANCELLED

    def __init__(self, message: str = "Translation was cancelled."):
        super().__init__(message)
