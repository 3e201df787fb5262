"""
File utilities for translation operations
"""
import os
import re
import uuid
from pathlib import Path
from typing import Callable, Optional

import aiofiles

from flow_translate.core.epub import translate_epub, TranslationConfig, TranslationOutcome
from flow_translate.core.epub.models import TranslationProgress
from flow_translate.core.job_slot import TranslationJobSlot, get_job_slot
from flow_translate.utils.unified_logger import LogType, info

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(name: str, default: str = "translated") -> str:
    """
    Make a translated title safe to use as a file name.

    Args:
        name: Candidate file name (may contain path separators or control chars)
        default: Returned when nothing usable remains

    Returns:
        str: Cleaned file name
    """
    cleaned = _INVALID_FILENAME_CHARS.sub('_', name)
    cleaned = re.sub(r'\s+', ' ', cleaned).strip(' .')
    return cleaned or default


def get_unique_output_path(output_path):
    """
    Generate a unique output path by adding a number suffix if the file already exists.

    Args:
        output_path (str): Desired output path

    Returns:
        str: Unique output path (original or with numeric suffix)

    Examples:
        book.epub -> book.epub (if doesn't exist)
        book.epub -> book (1).epub (if book.epub exists)
        book.epub -> book (2).epub (if book.epub and book (1).epub exist)
    """
    path = Path(output_path)
    if not path.exists():
        return str(output_path)

    parent = path.parent
    stem = path.stem
    suffix = path.suffix

    counter = 1
    while True:
        new_path = parent / f"{stem} ({counter}){suffix}"
        if not new_path.exists():
            return str(new_path)

        counter += 1
        if counter > 9999:
            raise RuntimeError(f"Could not find unique filename after 9999 attempts for: {output_path}")


def default_output_path(input_path: str, outcome: TranslationOutcome) -> str:
    """Place the translated archive next to the input, named after the translated title."""
    stem = sanitize_filename(outcome.translated_title)
    directory = os.path.dirname(os.path.abspath(input_path))
    return get_unique_output_path(os.path.join(directory, f"{stem}.epub"))


async def translate_epub_file(
    input_path: str,
    config: TranslationConfig,
    output_path: Optional[str] = None,
    progress_callback: Optional[Callable[[TranslationProgress], None]] = None,
    check_interruption_callback: Optional[Callable[[], bool]] = None,
    job_slot: Optional[TranslationJobSlot] = None,
    **translate_kwargs
) -> str:
    """
    Translate an EPUB file on disk

    Args:
        input_path: Path to the input .epub
        config: Translation configuration
        output_path: Where to write the result; defaults to
            "<translated title>.epub" next to the input
        progress_callback: Receives TranslationProgress snapshots
        check_interruption_callback: Returns True to cancel the run
        job_slot: Slot guarding concurrent runs (process-wide slot by default)
        **translate_kwargs: Passed through to translate_epub()

    Returns:
        str: Path of the written file

    Raises:
        FileNotFoundError: If the input file does not exist
        JobConflictError: If another translation holds the job slot
        TranslationError: If the translation fails
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input EPUB file '{input_path}' not found.")

    slot = job_slot or get_job_slot()
    job_id = f"{os.path.basename(input_path)}-{uuid.uuid4().hex[:8]}"

    with slot.hold(job_id):
        info(f"Reading {input_path}", LogType.FILE_OPERATION)
        async with aiofiles.open(input_path, 'rb') as f:
            file_bytes = await f.read()

        outcome = await translate_epub(
            file_bytes,
            config,
            progress_callback=progress_callback,
            check_interruption_callback=check_interruption_callback,
            file_name=os.path.basename(input_path),
            **translate_kwargs
        )

        target_path = output_path or default_output_path(input_path, outcome)
        output_dir = os.path.dirname(os.path.abspath(target_path))
        os.makedirs(output_dir, exist_ok=True)

        async with aiofiles.open(target_path, 'wb') as f:
            await f.write(outcome.archive_bytes)

        info(f"Saved translated EPUB: {target_path}", LogType.FILE_OPERATION)
        return target_path
