"""Unit tests for the command-line entry point."""

import pytest

import translate
from flow_translate.core.epub import TranslationProgress


class TestParser:

    def test_flags(self):
        args = translate.build_parser().parse_args([
            "-i", "book.epub", "-o", "out.epub", "--provider", "openai",
            "--api_key", "sk-test", "-m", "gpt-4o", "-tl", "German",
            "--instructions", "Keep names.", "--no-color",
        ])

        assert args.input == "book.epub"
        assert args.output == "out.epub"
        assert args.provider == "openai"
        assert args.api_key == "sk-test"
        assert args.model == "gpt-4o"
        assert args.target_lang == "German"
        assert args.instructions == "Keep names."
        assert args.no_color

    def test_input_required(self):
        with pytest.raises(SystemExit):
            translate.build_parser().parse_args([])

    def test_unknown_provider_rejected(self):
        with pytest.raises(SystemExit):
            translate.build_parser().parse_args(["-i", "book.epub", "--provider", "ollama"])


class TestMain:

    def test_missing_input_returns_error(self, tmp_path):
        code = translate.main(["-i", str(tmp_path / "missing.epub"), "--api_key", "k", "--no-color"])
        assert code == 1


class TestProgressBar:

    def test_updates_and_closes(self):
        bar = translate.ProgressBar()
        bar(TranslationProgress(total=1, current=0, current_section="Loading ePub file..."))
        bar(TranslationProgress(total=3, current=2, current_section="ch2.xhtml"))

        assert bar._bar.total == 3
        assert bar._bar.n == 2
        bar.close()
        assert bar._bar is None
