"""
Character-bounded batching of text units

Units are grouped into contiguous batches so a whole chapter usually travels
in one provider request. Each batch is packed with a sentinel delimiter,
translated once, then split back onto its units by position.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from flow_translate.prompts import build_batch_instructions
from ..llm.base import TranslationProvider
from .constants import (
    MIN_CHARS_PER_BATCH,
    MAX_CHARS_PER_BATCH,
    EARLY_CLOSE_RATIO,
    TEXT_UNIT_DELIMITER,
)
from .text_extractor import TextUnit


@dataclass(frozen=True)
class TextBatch:
    """
    Contiguous run of text units

    Attributes:
        start: Index of the first unit in the section's unit sequence
        units: Units in order (never empty)
        size: Cumulative character length
    """
    start: int
    units: tuple
    size: int

    @property
    def stop(self) -> int:
        return self.start + len(self.units)

    @property
    def texts(self) -> List[str]:
        return [unit.text for unit in self.units]


@dataclass
class BatchResult:
    """
    Outcome of translating one batch

    Attributes:
        texts: One text per unit; originals where no part came back
        parts_received: Number of parts in the provider reply
    """
    texts: List[str]
    parts_received: int

    @property
    def complete(self) -> bool:
        return self.parts_received >= len(self.texts)


def _should_close(size: int, next_length: int, min_chars: int, max_chars: int) -> bool:
    if size + next_length > max_chars:
        return True
    return size >= min_chars and size + next_length > max_chars * EARLY_CLOSE_RATIO


def create_batches(
    units: Sequence[TextUnit],
    min_chars: int = MIN_CHARS_PER_BATCH,
    max_chars: int = MAX_CHARS_PER_BATCH
) -> List[TextBatch]:
    """
    Partition units into ordered batches

    A batch closes when the next unit would push it past ``max_chars``, or
    when it already holds ``min_chars`` and the next unit would cross
    EARLY_CLOSE_RATIO of ``max_chars``. The first unit of a batch is always
    accepted, so a unit longer than ``max_chars`` becomes a batch of its own.

    Args:
        units: Text units in document order
        min_chars: Early-close threshold
        max_chars: Hard ceiling

    Returns:
        Batches covering every unit exactly once, in order
    """
    if min_chars > max_chars:
        raise ValueError("min_chars must not exceed max_chars")

    batches: List[TextBatch] = []
    current: List[TextUnit] = []
    current_size = 0
    start = 0

    for index, unit in enumerate(units):
        length = len(unit.text)
        if current and _should_close(current_size, length, min_chars, max_chars):
            batches.append(TextBatch(start=start, units=tuple(current), size=current_size))
            current = []
            current_size = 0
            start = index

        current.append(unit)
        current_size += length

    if current:
        batches.append(TextBatch(start=start, units=tuple(current), size=current_size))

    return batches


def join_texts(texts: Sequence[str], delimiter: str = TEXT_UNIT_DELIMITER) -> str:
    """Pack texts into one request body."""
    return delimiter.join(texts)


def split_translation(
    translated: str,
    originals: Sequence[str],
    delimiter: str = TEXT_UNIT_DELIMITER
) -> BatchResult:
    """
    Map a packed reply back onto its units

    Parts are assigned by position. Units past the last returned part keep
    their original text; surplus parts are dropped.
    """
    parts = translated.split(delimiter)
    texts = [
        parts[index] if index < len(parts) else original
        for index, original in enumerate(originals)
    ]
    return BatchResult(texts=texts, parts_received=len(parts))


async def translate_batch(
    provider: TranslationProvider,
    batch: TextBatch,
    instructions: Optional[str] = None
) -> BatchResult:
    """
    Translate one batch with a single provider call

    Provider errors propagate to the caller unchanged.
    """
    originals = batch.texts
    translated = await provider.translate(
        join_texts(originals),
        build_batch_instructions(TEXT_UNIT_DELIMITER, instructions)
    )
    return split_translation(translated, originals)
