"""
EPUB translation orchestration

This module drives one translation run: configuration checks, token
decryption, archive loading, title and section translation, and assembly of
the output archive. Sections and batches are processed strictly in order.
"""
import asyncio
from typing import Callable, List, Optional

import httpx

from flow_translate.prompts import with_target_language
from flow_translate.utils.secret_store import PlaintextSecretStore
from flow_translate.utils.unified_logger import LogType, debug, info, warning, error
from ..exceptions import TranslationError, UnknownError
from ..llm.base import TranslationProvider
from ..llm.exceptions import ProviderError
from ..llm.factory import create_provider
from .batcher import TextBatch, create_batches, translate_batch
from .constants import (
    MIN_CHARS_PER_BATCH,
    MAX_CHARS_PER_BATCH,
    MAX_FAILED_SECTION_RATIO,
    DEFAULT_TITLE,
)
from .document_loader import EpubDocumentLoader
from .events import (
    Event,
    EventBus,
    EventType,
    create_batch_event,
    create_fallback_event,
    create_section_event,
)
from .exceptions import (
    DecryptionError,
    EmptyEpubError,
    EpubLoadError,
    NoSectionsTranslatedError,
    SectionLoadError,
    SectionNotFoundError,
    TooManyFailuresError,
    TranslationCancelledError,
)
from .interfaces import DocumentLoader, SecretStore, Section
from .models import RunState, TranslationConfig, TranslationOutcome, TranslationProgress
from .rebuilder import ArchiveRebuilder
from .text_extractor import apply_translations, extract_text_units

ProgressCallback = Callable[[TranslationProgress], None]
InterruptionCallback = Callable[[], bool]
ProviderFactory = Callable[..., TranslationProvider]


def _title_from_file_name(file_name: Optional[str]) -> str:
    if file_name:
        stem = file_name[:-5] if file_name.lower().endswith('.epub') else file_name
        if stem.strip():
            return stem
    return DEFAULT_TITLE


class TranslationOrchestrator:
    """
    Runs a single EPUB translation

    An orchestrator instance is good for one run. ``state`` follows
    IDLE -> VALIDATING_CONFIG -> LOADING_ARCHIVE -> TRANSLATING_TITLE ->
    TRANSLATING_SECTIONS -> REBUILDING -> DONE, or FAILED from any of them
    with ``failure_code`` set.
    """

    def __init__(
        self,
        config: TranslationConfig,
        secret_store: Optional[SecretStore] = None,
        document_loader: Optional[DocumentLoader] = None,
        provider_factory: ProviderFactory = create_provider,
        client: Optional[httpx.AsyncClient] = None,
        event_bus: Optional[EventBus] = None,
        min_chars: int = MIN_CHARS_PER_BATCH,
        max_chars: int = MAX_CHARS_PER_BATCH
    ):
        self.config = config
        self.secret_store = secret_store or PlaintextSecretStore()
        self.document_loader = document_loader or EpubDocumentLoader()
        self.provider_factory = provider_factory
        self.client = client
        self.event_bus = event_bus
        self.min_chars = min_chars
        self.max_chars = max_chars

        self.state = RunState.IDLE
        self.failure_code = None
        self.successful_sections = 0
        self.failed_sections = 0

        self._progress_callback: Optional[ProgressCallback] = None
        self._check_interruption: Optional[InterruptionCallback] = None
        self._instructions: Optional[str] = None

    # === Callbacks and events ===

    def _emit_progress(self, total: int, current: int, current_section: str) -> None:
        if self._progress_callback:
            self._progress_callback(TranslationProgress(total=total, current=current,
                                                        current_section=current_section))

    def _publish(self, event: Event) -> None:
        if self.event_bus:
            self.event_bus.publish(event)

    def _raise_if_cancelled(self) -> None:
        if self._check_interruption and self._check_interruption():
            raise TranslationCancelledError()

    # === Run ===

    async def run(
        self,
        file_bytes: bytes,
        progress_callback: Optional[ProgressCallback] = None,
        check_interruption_callback: Optional[InterruptionCallback] = None,
        file_name: Optional[str] = None
    ) -> TranslationOutcome:
        """
        Translate an EPUB archive

        Args:
            file_bytes: Raw EPUB bytes
            progress_callback: Receives a TranslationProgress after each step
            check_interruption_callback: Returns True to cancel the run
            file_name: Input file name, used when metadata has no title

        Returns:
            TranslationOutcome with the translated archive

        Raises:
            TranslationError: Any failure, classified by its code
        """
        if self.state != RunState.IDLE:
            raise RuntimeError("TranslationOrchestrator instances are single-use")

        self._progress_callback = progress_callback
        self._check_interruption = check_interruption_callback
        self._publish(Event(EventType.TRANSLATION_STARTED, {'file_name': file_name}, source="orchestrator"))

        provider = None
        try:
            self.state = RunState.VALIDATING_CONFIG
            self.config.validate()
            self._instructions = with_target_language(self.config.instructions, self.config.target_language)

            api_token = await self._decrypt_token()
            provider = self.provider_factory(
                self.config.resolved_provider, api_token, self.config.model, client=self.client
            )

            self.state = RunState.LOADING_ARCHIVE
            self._emit_progress(1, 0, 'Loading ePub file...')
            loaded = await self._load(file_bytes)
            sections = list(loaded.sections)
            if not sections:
                raise EmptyEpubError()
            rebuilder = await self._open_rebuilder(file_bytes)

            self.state = RunState.TRANSLATING_TITLE
            original_title = loaded.title or _title_from_file_name(file_name)
            self._emit_progress(1, 0, 'Translating title...')
            translated_title = await self._translate_title(provider, original_title)
            total = len(sections)
            self._emit_progress(total, 0, f'Title translated: {translated_title}')

            self.state = RunState.TRANSLATING_SECTIONS
            self._emit_progress(total, 0, 'Preparing translation...')
            await self._translate_sections(provider, sections, rebuilder)

            if self.successful_sections == 0:
                raise NoSectionsTranslatedError()

            self.state = RunState.REBUILDING
            rebuilder.patch_title(translated_title)
            archive_bytes = await asyncio.to_thread(rebuilder.build)
            self._emit_progress(total, total, 'Generating ePub file...')

            outcome = TranslationOutcome(
                archive_bytes=archive_bytes,
                translated_title=translated_title,
                file_name=f"{translated_title}.epub",
                successful_sections=self.successful_sections,
                failed_sections=self.failed_sections,
            )
            self.state = RunState.DONE
            info(f"Translation complete: {self.successful_sections} successful, "
                 f"{self.failed_sections} failed")
            self._publish(Event(EventType.TRANSLATION_COMPLETED, {
                'translated_title': translated_title,
                'successful_sections': self.successful_sections,
                'failed_sections': self.failed_sections,
            }, source="orchestrator"))
            return outcome

        except TranslationError as e:
            self._fail(e)
            raise
        except Exception as e:
            wrapped = UnknownError(f"Translation failed: {e}")
            self._fail(wrapped)
            raise wrapped from e
        finally:
            if provider is not None:
                await provider.close()

    def _fail(self, err: TranslationError) -> None:
        self.state = RunState.FAILED
        self.failure_code = err.code
        error(err.message, LogType.ERROR_DETAIL, {'code': err.code.value})
        self._publish(Event(EventType.TRANSLATION_FAILED, {
            'code': err.code.value,
            'message': err.message,
        }, source="orchestrator"))

    async def _decrypt_token(self) -> str:
        try:
            api_token = await self.secret_store.decrypt(self.config.api_token)
        except Exception as e:
            raise DecryptionError() from e
        if not api_token:
            raise DecryptionError()
        return api_token

    async def _load(self, file_bytes: bytes):
        try:
            return await self.document_loader.load(file_bytes)
        except Exception as e:
            raise EpubLoadError(f"Failed to load ePub file: {e}") from e

    async def _open_rebuilder(self, file_bytes: bytes) -> ArchiveRebuilder:
        try:
            return await asyncio.to_thread(ArchiveRebuilder.from_bytes, file_bytes)
        except Exception as e:
            raise EpubLoadError(f"Failed to load ePub file: {e}") from e

    async def _translate_title(self, provider: TranslationProvider, title: str) -> str:
        try:
            translated = (await provider.translate(title, self._instructions)).strip()
        except ProviderError as e:
            warning(f"Failed to translate title, using original: {e}")
            return title
        return translated or title

    # === Sections ===

    async def _translate_sections(
        self,
        provider: TranslationProvider,
        sections: List[Section],
        rebuilder: ArchiveRebuilder
    ) -> None:
        total = len(sections)
        for index, section in enumerate(sections):
            self._raise_if_cancelled()
            name = section.href or f"section-{index}"
            self._publish(create_section_event(EventType.SECTION_STARTED, index, total, name))
            info(f"Translating section: {name}", LogType.SECTION_INFO)

            try:
                complete = await self._translate_section(provider, section, name, rebuilder)
            except TranslationCancelledError:
                raise
            except Exception as e:
                if isinstance(e, TranslationError) and e.critical:
                    raise
                self.failed_sections += 1
                code = e.code.value if isinstance(e, TranslationError) else UnknownError.code.value
                error(f"Failed to translate section {name}: {e}", LogType.ERROR_DETAIL,
                      {'code': code, 'section': name})
                self._publish(create_section_event(EventType.SECTION_FAILED, index, total, name,
                                                   error=str(e), code=code))
            else:
                if complete is None:
                    warning(f"Section {name} has no document, skipping")
                    self._publish(create_section_event(EventType.SECTION_SKIPPED, index, total, name))
                elif complete:
                    self.successful_sections += 1
                    self._publish(create_section_event(EventType.SECTION_COMPLETED, index, total, name))
                else:
                    self.failed_sections += 1
                    self._publish(create_section_event(EventType.SECTION_FAILED, index, total, name,
                                                       error="Some batches kept their original text",
                                                       partial=True))

            self._emit_progress(total, index + 1, name)

            if self.failed_sections > total * MAX_FAILED_SECTION_RATIO:
                raise TooManyFailuresError(self.failed_sections, total)

    async def _translate_section(
        self,
        provider: TranslationProvider,
        section: Section,
        name: str,
        rebuilder: ArchiveRebuilder
    ) -> Optional[bool]:
        """
        Translate one section and write it into the output archive

        Returns:
            True when every batch was translated, False when some batch kept
            its original text, None when the section has no document
        """
        try:
            document = await section.load()
        except TranslationError:
            raise
        except Exception as e:
            raise SectionLoadError(f"Failed to load section {name}: {e}", section=name) from e
        if document is None:
            return None

        units = extract_text_units(document.root)
        batches = create_batches(units, self.min_chars, self.max_chars)
        debug(f"{name}: {len(units)} text units in {len(batches)} batches", LogType.SECTION_INFO)

        texts = [unit.text for unit in units]
        complete = True
        for batch_index, batch in enumerate(batches):
            self._raise_if_cancelled()
            if not await self._translate_batch(provider, batch, batch_index, len(batches), name, texts):
                complete = False

        apply_translations(units, texts)
        serialized = document.serialize()

        path = rebuilder.resolve_section(section.href, getattr(section, 'url', None))
        if path is None:
            raise SectionNotFoundError(name)
        rebuilder.overwrite(path, serialized)
        return complete

    async def _translate_batch(
        self,
        provider: TranslationProvider,
        batch: TextBatch,
        batch_index: int,
        total_batches: int,
        name: str,
        texts: List[str]
    ) -> bool:
        try:
            result = await translate_batch(provider, batch, self._instructions)
        except ProviderError as e:
            if e.critical:
                raise
            warning(f"Batch {batch_index + 1}/{total_batches} of {name} failed, keeping original text: {e}")
            self._publish(create_batch_event(name, batch_index, total_batches, len(batch.units),
                                             batch.size, success=False, error=str(e)))
            self._publish(create_fallback_event(name, batch_index, len(batch.units), str(e)))
            return False

        if not result.complete:
            warning(f"Batch {batch_index + 1}/{total_batches} of {name}: expected "
                    f"{len(batch.units)} parts, got {result.parts_received}")
            self._publish(create_fallback_event(
                name, batch_index, len(batch.units) - result.parts_received, "missing delimiter parts"
            ))

        texts[batch.start:batch.stop] = result.texts
        self._publish(create_batch_event(name, batch_index, total_batches, len(batch.units), batch.size))
        return True


async def translate_epub(
    file_bytes: bytes,
    config: TranslationConfig,
    progress_callback: Optional[ProgressCallback] = None,
    check_interruption_callback: Optional[InterruptionCallback] = None,
    file_name: Optional[str] = None,
    secret_store: Optional[SecretStore] = None,
    document_loader: Optional[DocumentLoader] = None,
    provider_factory: ProviderFactory = create_provider,
    client: Optional[httpx.AsyncClient] = None,
    event_bus: Optional[EventBus] = None,
    min_chars: int = MIN_CHARS_PER_BATCH,
    max_chars: int = MAX_CHARS_PER_BATCH
) -> TranslationOutcome:
    """
    Translate an EPUB archive held in memory

    This is the main entry point of the translation core.

    Args:
        file_bytes: Raw EPUB bytes
        config: Provider, token, model and optional instructions
        progress_callback: Receives TranslationProgress snapshots
        check_interruption_callback: Returns True to cancel the run
        file_name: Input file name, used when metadata has no title
        secret_store: Token decryption (plaintext pass-through by default)
        document_loader: Archive loader (lxml loader by default)
        provider_factory: Builds the provider from (provider, token, model)
        client: Optional shared httpx client
        event_bus: Optional event bus for lifecycle events
        min_chars: Early-close batch threshold
        max_chars: Batch size ceiling

    Returns:
        TranslationOutcome

    Raises:
        TranslationError: Any failure, classified by its code
    """
    orchestrator = TranslationOrchestrator(
        config,
        secret_store=secret_store,
        document_loader=document_loader,
        provider_factory=provider_factory,
        client=client,
        event_bus=event_bus,
        min_chars=min_chars,
        max_chars=max_chars,
    )
    return await orchestrator.run(
        file_bytes,
        progress_callback=progress_callback,
        check_interruption_callback=check_interruption_callback,
        file_name=file_name,
    )
