"""
Command-line interface for EPUB translation
"""
import sys
import argparse
import asyncio

from tqdm.auto import tqdm

from flow_translate.config import (
    LLM_PROVIDER, DEFAULT_MODEL, ANTHROPIC_API_KEY, OPENAI_API_KEY,
    DEFAULT_TARGET_LANGUAGE, TRANSLATION_INSTRUCTIONS
)
from flow_translate.core.exceptions import TranslationError
from flow_translate.core.epub import TranslationConfig, TranslationProgress
from flow_translate.utils.file_utils import translate_epub_file
from flow_translate.utils.unified_logger import setup_cli_logger, LogType

_API_KEYS = {
    'anthropic': ANTHROPIC_API_KEY,
    'openai': OPENAI_API_KEY,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate an EPUB file with an LLM provider.")
    parser.add_argument("-i", "--input", required=True, help="Path to the input EPUB file.")
    parser.add_argument("-o", "--output", default=None,
                        help="Path to the output file. If not specified, uses the translated title next to the input.")
    parser.add_argument("--provider", default=LLM_PROVIDER, choices=["anthropic", "openai"],
                        help=f"LLM provider to use (default: {LLM_PROVIDER}).")
    parser.add_argument("--api_key", default=None,
                        help="API key for the provider (default: ANTHROPIC_API_KEY or OPENAI_API_KEY from the environment).")
    parser.add_argument("-m", "--model", default=DEFAULT_MODEL, help=f"LLM model (default: {DEFAULT_MODEL}).")
    parser.add_argument("-tl", "--target_lang", default=DEFAULT_TARGET_LANGUAGE or None,
                        help="Target language, added to the translation instructions.")
    parser.add_argument("--instructions", default=TRANSLATION_INSTRUCTIONS or None,
                        help="Additional instructions for the translator.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


class ProgressBar:
    """tqdm bar driven by TranslationProgress snapshots"""

    def __init__(self):
        self._bar = None

    def __call__(self, progress: TranslationProgress) -> None:
        if self._bar is None or self._bar.total != progress.total:
            self.close()
            self._bar = tqdm(total=progress.total, desc="Translating EPUB", unit="section")
        self._bar.n = progress.current
        self._bar.set_postfix_str(progress.current_section, refresh=False)
        self._bar.refresh()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_cli_logger(enable_colors=not args.no_color)

    api_key = args.api_key or _API_KEYS.get(args.provider, '')
    if not api_key:
        parser.error(f"--api_key is required when using {args.provider} provider")

    config = TranslationConfig(
        provider=args.provider,
        api_token=api_key,
        model=args.model,
        instructions=args.instructions,
        target_language=args.target_lang,
    )

    logger.info("Translation Started", LogType.TRANSLATION_START, {
        'input_file': args.input,
        'target_lang': args.target_lang,
        'provider': args.provider,
        'model': args.model,
    })

    progress_bar = ProgressBar()
    try:
        output_path = asyncio.run(translate_epub_file(
            args.input,
            config,
            output_path=args.output,
            progress_callback=progress_bar,
        ))
    except TranslationError as e:
        progress_bar.close()
        logger.error(e.message, LogType.ERROR_DETAIL, {'code': e.code.value, 'input_file': args.input})
        return 1
    except FileNotFoundError as e:
        progress_bar.close()
        logger.error(str(e), LogType.ERROR_DETAIL, {'input_file': args.input})
        return 1
    progress_bar.close()

    logger.info("Translation Completed Successfully", LogType.TRANSLATION_END, {
        'output_file': output_path
    })
    return 0


if __name__ == "__main__":
    sys.exit(main())
