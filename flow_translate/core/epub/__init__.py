"""
EPUB translation module

This module translates EPUB archives held in memory, leaving markup,
resources and container layout untouched.

Main entry point:
    translate_epub() - Translate EPUB bytes and return the new archive

Components:
    - translator: Run orchestration
    - text_extractor: Text unit extraction and write-back
    - batcher: Character-bounded batching and delimiter packing
    - path_resolver: Spine section to archive path resolution
    - archive / rebuilder: Archive codec and output assembly
    - document_loader: Default lxml-based document loader
    - events: Run lifecycle events
"""

from .translator import translate_epub, TranslationOrchestrator
from .models import TranslationConfig, TranslationProgress, TranslationOutcome, RunState
from .document_loader import EpubDocumentLoader
from .events import EventBus, EventType, Event
from .exceptions import (
    EpubTranslationError,
    ConfigurationError,
    MissingProviderError,
    MissingApiKeyError,
    MissingModelError,
    DecryptionError,
    EpubLoadError,
    EmptyEpubError,
    SectionLoadError,
    SectionNotFoundError,
    TooManyFailuresError,
    NoSectionsTranslatedError,
    TranslationCancelledError,
)
from .constants import (
    MIN_CHARS_PER_BATCH,
    MAX_CHARS_PER_BATCH,
    TEXT_UNIT_DELIMITER,
)

__all__ = [
    # Main translation function
    'translate_epub',
    'TranslationOrchestrator',

    # Models
    'TranslationConfig',
    'TranslationProgress',
    'TranslationOutcome',
    'RunState',

    # Collaborators and events
    'EpubDocumentLoader',
    'EventBus',
    'EventType',
    'Event',

    # Exceptions
    'EpubTranslationError',
    'ConfigurationError',
    'MissingProviderError',
    'MissingApiKeyError',
    'MissingModelError',
    'DecryptionError',
    'EpubLoadError',
    'EmptyEpubError',
    'SectionLoadError',
    'SectionNotFoundError',
    'TooManyFailuresError',
    'NoSectionsTranslatedError',
    'TranslationCancelledError',

    # Constants
    'MIN_CHARS_PER_BATCH',
    'MAX_CHARS_PER_BATCH',
    'TEXT_UNIT_DELIMITER',
]
