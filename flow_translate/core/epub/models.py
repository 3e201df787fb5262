"""
Data structures shared by the EPUB translation pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..llm.factory import Provider
from .exceptions import MissingApiKeyError, MissingModelError, MissingProviderError


@dataclass
class TranslationConfig:
    """Configuration for one translation run.

    Attributes:
        provider: Translation back-end (Provider or its name)
        api_token: Secret handed to the secret store for decryption
        model: Model identifier
        instructions: Optional extra instructions for the system prompt
        target_language: Optional target language name
    """
    provider: Union[Provider, str, None] = None
    api_token: Optional[str] = None
    model: Optional[str] = None
    instructions: Optional[str] = None
    target_language: Optional[str] = None

    @property
    def resolved_provider(self) -> Optional[Provider]:
        return Provider.parse(self.provider)

    def validate(self) -> None:
        """Check required fields in order.

        Raises:
            MissingProviderError: provider absent or unknown
            MissingApiKeyError: api_token absent
            MissingModelError: model absent
        """
        if self.resolved_provider is None:
            raise MissingProviderError()
        if not self.api_token:
            raise MissingApiKeyError()
        if not self.model:
            raise MissingModelError()


@dataclass(frozen=True)
class TranslationProgress:
    """Progress snapshot passed to the progress callback."""
    total: int
    current: int
    current_section: str

    @property
    def percentage(self) -> float:
        return (self.current / self.total * 100) if self.total > 0 else 0.0


@dataclass
class TranslationOutcome:
    """Result of a completed run.

    Attributes:
        archive_bytes: Translated EPUB archive
        translated_title: Title written into the package metadata
        file_name: Suggested output file name
        successful_sections: Sections translated and written
        failed_sections: Sections left untranslated or partially translated
    """
    archive_bytes: bytes
    translated_title: str
    file_name: str
    successful_sections: int = 0
    failed_sections: int = 0


class RunState(Enum):
    """Orchestrator run states"""
    IDLE = "idle"
    VALIDATING_CONFIG = "validating_config"
    LOADING_ARCHIVE = "loading_archive"
    TRANSLATING_TITLE = "translating_title"
    TRANSLATING_SECTIONS = "translating_sections"
    REBUILDING = "rebuilding"
    DONE = "done"
    FAILED = "failed"
