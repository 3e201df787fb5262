"""
Thread-safe single-job slot

Only one translation may run per process. Callers acquire the slot with a job
id before starting and release it when done; a second acquire while the slot
is held fails instead of replacing the holder.
"""
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .exceptions import ErrorCode, TranslationError


class JobConflictError(TranslationError):
    """Raised when a translation is already running."""
    code = ErrorCode.JOB_CONFLICT

    def __init__(self, active_job: str, requested_job: str):
        super().__init__(
            f"A translation is already in progress ({active_job}). "
            f"Wait for it to finish before starting {requested_job}.",
            context={'active_job': active_job, 'requested_job': requested_job}
        )
        self.active_job = active_job
        self.requested_job = requested_job


class TranslationJobSlot:
    """Thread-safe holder of the active translation job id"""

    def __init__(self):
        self._active_job: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def active_job(self) -> Optional[str]:
        with self._lock:
            return self._active_job

    def acquire(self, job_id: str) -> None:
        """
        Claim the slot for ``job_id``

        Raises:
            JobConflictError: If another job holds the slot
        """
        with self._lock:
            if self._active_job is not None:
                raise JobConflictError(self._active_job, job_id)
            self._active_job = job_id

    def release(self, job_id: str) -> bool:
        """Free the slot if ``job_id`` holds it. Returns True when released."""
        with self._lock:
            if self._active_job != job_id:
                return False
            self._active_job = None
            return True

    @contextmanager
    def hold(self, job_id: str) -> Iterator[str]:
        self.acquire(job_id)
        try:
            yield job_id
        finally:
            self.release(job_id)


# Global slot instance
_job_slot = None
_job_slot_lock = threading.Lock()


def get_job_slot() -> TranslationJobSlot:
    """Get or create the process-wide job slot"""
    global _job_slot
    with _job_slot_lock:
        if _job_slot is None:
            _job_slot = TranslationJobSlot()
        return _job_slot
