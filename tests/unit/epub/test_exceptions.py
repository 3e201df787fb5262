"""Unit tests for custom exceptions."""

import pytest
from flow_translate.core.exceptions import ErrorCode, TranslationError, UnknownError, CRITICAL_CODES
from flow_translate.core.llm.exceptions import (
    InvalidApiKeyError,
    RateLimitError,
    InvalidRequestError,
    NetworkError,
    ApiError,
    UnknownProviderError,
    error_for_status,
)
from flow_translate.core.epub.exceptions import (
    EpubTranslationError,
    ConfigurationError,
    MissingProviderError,
    MissingApiKeyError,
    MissingModelError,
    DecryptionError,
    EmptyEpubError,
    SectionNotFoundError,
    TooManyFailuresError,
    NoSectionsTranslatedError,
    TranslationCancelledError,
)


class TestTranslationError:
    """Test base exception class."""

    def test_base_exception_message(self):
        error = TranslationError("Test error")
        assert str(error) == "Test error"
        assert error.code == ErrorCode.UNKNOWN_ERROR
        assert error.context == {}

    def test_explicit_code_overrides_class_code(self):
        error = TranslationError("Test", code=ErrorCode.API_ERROR, status_code=502)
        assert error.code == ErrorCode.API_ERROR
        assert error.status_code == 502

    def test_epub_errors_inherit_from_base(self):
        assert isinstance(EmptyEpubError(), TranslationError)
        assert isinstance(MissingModelError(), ConfigurationError)
        assert isinstance(MissingModelError(), EpubTranslationError)


class TestCriticality:
    """Only systemic provider errors abort a run."""

    @pytest.mark.parametrize("error_class", [InvalidApiKeyError, RateLimitError, InvalidRequestError, NetworkError])
    def test_critical(self, error_class):
        assert error_class("x").critical

    @pytest.mark.parametrize("error", [
        ApiError("x", status_code=500),
        UnknownProviderError("x"),
        SectionNotFoundError("ch1.xhtml"),
        EmptyEpubError(),
        UnknownError("x"),
    ])
    def test_not_critical(self, error):
        assert not error.critical

    def test_critical_code_set(self):
        assert CRITICAL_CODES == {
            ErrorCode.INVALID_API_KEY,
            ErrorCode.RATE_LIMIT,
            ErrorCode.NETWORK_ERROR,
            ErrorCode.INVALID_REQUEST,
        }

    def test_unknown_provider_error_is_unknown_error(self):
        assert isinstance(UnknownProviderError("x"), UnknownError)


class TestMessages:
    """Messages are shown to users as-is."""

    def test_configuration_messages(self):
        assert MissingProviderError().code == ErrorCode.MISSING_PROVIDER
        assert "API token is required" in str(MissingApiKeyError())
        assert "Model is required" in str(MissingModelError())
        assert DecryptionError().code == ErrorCode.DECRYPTION_ERROR

    def test_too_many_failures(self):
        error = TooManyFailuresError(6, 10)

        assert str(error) == "Translation failed for more than 50% of sections (6/10). Aborting."
        assert error.failed_sections == 6
        assert error.total_sections == 10
        assert error.code == ErrorCode.TOO_MANY_FAILURES

    def test_section_not_found(self):
        error = SectionNotFoundError("Text/ch9.xhtml")
        assert str(error) == "Could not find path for section: Text/ch9.xhtml"
        assert error.context == {"section": "Text/ch9.xhtml"}

    def test_misc_codes(self):
        assert NoSectionsTranslatedError().code == ErrorCode.NO_SECTIONS_TRANSLATED
        assert TranslationCancelledError().code == ErrorCode.CANCELLED

    def test_error_for_status_rate_limit(self):
        error = error_for_status(429, "OpenAI", "slow down")
        assert isinstance(error, RateLimitError)
        assert str(error) == "Rate limit exceeded. Please try again in a few moments."
