"""
Core translation modules
"""
from .exceptions import ErrorCode, TranslationError, UnknownError
from .epub import translate_epub, TranslationConfig, TranslationOutcome
from .job_slot import TranslationJobSlot, JobConflictError, get_job_slot

__all__ = [
    'ErrorCode',
    'TranslationError',
    'UnknownError',
    'translate_epub',
    'TranslationConfig',
    'TranslationOutcome',
    'TranslationJobSlot',
    'JobConflictError',
    'get_job_slot',
]
