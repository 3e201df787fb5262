"""
Output archive assembly

The output starts as a verbatim clone of the input archive. Translated
sections overwrite their entries, the package document gets the translated
title, and the result is encoded with the input's compression layout.
"""
import re
from typing import Optional
from xml.sax.saxutils import escape

from flow_translate.utils.unified_logger import warning, debug
from .archive import EpubArchive, read_archive, write_archive
from .path_resolver import find_section_path

_TITLE_PATTERN = re.compile(r'(<dc:title\b[^>]*(?<!/)>)(.*?)(</dc:title>)', re.DOTALL)


def find_package_document(archive: EpubArchive) -> Optional[str]:
    """Return the first archive path that looks like the OPF package document."""
    for path in archive.paths():
        if path.endswith('.opf') or 'content.opf' in path:
            return path
    return None


def replace_title(opf_text: str, title: str) -> str:
    """Substitute the content of the first <dc:title> element."""
    escaped = escape(title)
    return _TITLE_PATTERN.sub(lambda m: f"{m.group(1)}{escaped}{m.group(3)}", opf_text, count=1)


class ArchiveRebuilder:
    """Builds the translated archive from a clone of the source archive."""

    def __init__(self, source: EpubArchive):
        self._archive = source.copy()
        self.overwritten = []

    @classmethod
    def from_bytes(cls, data: bytes) -> "ArchiveRebuilder":
        return cls(read_archive(data))

    @property
    def archive(self) -> EpubArchive:
        return self._archive

    def resolve_section(self, href: Optional[str], url: Optional[str]) -> Optional[str]:
        """Find the archive path of a spine section (see path_resolver)."""
        return find_section_path(href, url, self._archive.paths())

    def overwrite(self, path: str, data: bytes) -> None:
        """Replace an entry's content with translated bytes."""
        self._archive.write(path, data)
        self.overwritten.append(path)
        debug(f"Updated archive entry: {path}")

    def patch_title(self, title: str) -> bool:
        """
        Write the translated title into the package document

        Failure is logged and never raised.

        Returns:
            True if the package document was updated
        """
        try:
            opf_path = find_package_document(self._archive)
            if opf_path is None:
                warning("Package document not found; title left unchanged")
                return False

            opf_text = self._archive.read(opf_path).decode('utf-8')
            updated = replace_title(opf_text, title)
            if updated == opf_text:
                return False

            self._archive.write(opf_path, updated.encode('utf-8'))
            return True
        except (UnicodeDecodeError, KeyError, re.error) as e:
            warning(f"Failed to update OPF metadata: {e}")
            return False

    def build(self) -> bytes:
        """Encode the output archive."""
        return write_archive(self._archive)
