"""Unit tests for the single-job slot."""

import threading

import pytest

from flow_translate.core.exceptions import ErrorCode
from flow_translate.core.job_slot import JobConflictError, TranslationJobSlot, get_job_slot


class TestTranslationJobSlot:

    def test_acquire_and_release(self):
        slot = TranslationJobSlot()
        slot.acquire("job-1")
        assert slot.active_job == "job-1"

        assert slot.release("job-1")
        assert slot.active_job is None

    def test_conflict_keeps_holder(self):
        slot = TranslationJobSlot()
        slot.acquire("job-1")

        with pytest.raises(JobConflictError) as exc_info:
            slot.acquire("job-2")

        assert exc_info.value.code == ErrorCode.JOB_CONFLICT
        assert exc_info.value.active_job == "job-1"
        assert slot.active_job == "job-1"

    def test_release_by_non_holder_ignored(self):
        slot = TranslationJobSlot()
        slot.acquire("job-1")

        assert not slot.release("job-2")
        assert slot.active_job == "job-1"

    def test_hold_releases_on_error(self):
        slot = TranslationJobSlot()

        with pytest.raises(RuntimeError):
            with slot.hold("job-1"):
                assert slot.active_job == "job-1"
                raise RuntimeError("failed")

        assert slot.active_job is None

    def test_only_one_thread_wins(self):
        slot = TranslationJobSlot()
        winners = []
        conflicts = []
        barrier = threading.Barrier(8)

        def worker(n):
            barrier.wait()
            try:
                slot.acquire(f"job-{n}")
                winners.append(n)
            except JobConflictError:
                conflicts.append(n)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(winners) == 1
        assert len(conflicts) == 7

    def test_global_slot_is_shared(self):
        assert get_job_slot() is get_job_slot()
