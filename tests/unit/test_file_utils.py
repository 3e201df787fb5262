"""Unit tests for the file-level translation helper."""

import os
import zipfile

import pytest

from flow_translate.core.job_slot import JobConflictError, TranslationJobSlot
from flow_translate.utils.file_utils import (
    get_unique_output_path,
    sanitize_filename,
    translate_epub_file,
)
from conftest import ScriptedProvider, RecordingFactory


class TestSanitizeFilename:

    @pytest.mark.parametrize("name,expected", [
        ("Le Petit Prince", "Le Petit Prince"),
        ("AC/DC: Live?", "AC_DC_ Live_"),
        ("  spaced   out  ", "spaced out"),
        ("...", "translated"),
        ("", "translated"),
    ])
    def test_sanitize(self, name, expected):
        assert sanitize_filename(name) == expected


class TestUniqueOutputPath:

    def test_free_path_unchanged(self, tmp_path):
        target = tmp_path / "book.epub"
        assert get_unique_output_path(str(target)) == str(target)

    def test_numbered_suffix(self, tmp_path):
        (tmp_path / "book.epub").write_bytes(b"x")
        (tmp_path / "book (1).epub").write_bytes(b"x")

        assert get_unique_output_path(str(tmp_path / "book.epub")) == str(tmp_path / "book (2).epub")


class TestTranslateEpubFile:

    @pytest.mark.asyncio
    async def test_writes_next_to_input(self, tmp_path, make_epub, config):
        source = tmp_path / "input.epub"
        source.write_bytes(make_epub(["<p>hello</p>"], title="Book"))

        output = await translate_epub_file(
            str(source), config,
            job_slot=TranslationJobSlot(),
            provider_factory=RecordingFactory(ScriptedProvider(str.upper)),
        )

        assert output == str(tmp_path / "BOOK.epub")
        assert zipfile.is_zipfile(output)

        second = await translate_epub_file(
            str(source), config,
            job_slot=TranslationJobSlot(),
            provider_factory=RecordingFactory(ScriptedProvider(str.upper)),
        )
        assert second == str(tmp_path / "BOOK (1).epub")

    @pytest.mark.asyncio
    async def test_explicit_output_path(self, tmp_path, make_epub, config):
        source = tmp_path / "input.epub"
        source.write_bytes(make_epub(["<p>hello</p>"]))
        target = tmp_path / "out" / "result.epub"

        output = await translate_epub_file(
            str(source), config, output_path=str(target),
            job_slot=TranslationJobSlot(),
            provider_factory=RecordingFactory(ScriptedProvider()),
        )

        assert output == str(target)
        assert os.path.exists(target)

    @pytest.mark.asyncio
    async def test_slot_released_after_run(self, tmp_path, make_epub, config):
        source = tmp_path / "input.epub"
        source.write_bytes(make_epub(["<p>hello</p>"]))
        slot = TranslationJobSlot()

        await translate_epub_file(str(source), config, job_slot=slot,
                                  provider_factory=RecordingFactory(ScriptedProvider()))

        assert slot.active_job is None

    @pytest.mark.asyncio
    async def test_conflict_when_slot_held(self, tmp_path, make_epub, config):
        source = tmp_path / "input.epub"
        source.write_bytes(make_epub(["<p>hello</p>"]))
        slot = TranslationJobSlot()
        slot.acquire("other-job")
        provider = ScriptedProvider()

        with pytest.raises(JobConflictError):
            await translate_epub_file(str(source), config, job_slot=slot,
                                      provider_factory=RecordingFactory(provider))

        assert slot.active_job == "other-job"
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_missing_input(self, tmp_path, config):
        with pytest.raises(FileNotFoundError):
            await translate_epub_file(str(tmp_path / "nope.epub"), config, job_slot=TranslationJobSlot())
