"""
EPUB archive codec

Bidirectional conversion between raw archive bytes and an ordered
path -> entry mapping that keeps per-entry zip metadata.

Output layout follows the OCF container rules:
- File order: mimetype first, then every other entry in its original order
- Compression: mimetype stored and copied verbatim, others keep the
  compression method they had in the input
"""
import io
import zipfile
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from .constants import MIMETYPE_ENTRY, EPUB_MIMETYPE


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One file inside the archive

    Attributes:
        path: Path inside the archive
        data: Uncompressed content
        compress_type: zipfile compression constant
        date_time: Modification timestamp tuple
        external_attr: Host file attributes
    """
    path: str
    data: bytes
    compress_type: int = zipfile.ZIP_DEFLATED
    date_time: Tuple[int, int, int, int, int, int] = (1980, 1, 1, 0, 0, 0)
    external_attr: int = 0

    def with_data(self, data: bytes) -> "ArchiveEntry":
        return replace(self, data=data)

    def to_zipinfo(self) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(self.path, date_time=self.date_time)
        info.compress_type = self.compress_type
        info.external_attr = self.external_attr
        return info


class EpubArchive:
    """Ordered mapping of archive paths to entries (directories excluded)."""

    def __init__(self, entries: Optional[Dict[str, ArchiveEntry]] = None):
        self._entries: Dict[str, ArchiveEntry] = dict(entries or {})

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def paths(self) -> list:
        return list(self._entries)

    def get(self, path: str) -> Optional[ArchiveEntry]:
        return self._entries.get(path)

    def read(self, path: str) -> bytes:
        return self._entries[path].data

    def entries(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries.values())

    def write(self, path: str, data: bytes) -> None:
        """Overwrite (or add) an entry, keeping existing zip metadata."""
        existing = self._entries.get(path)
        if existing is not None:
            self._entries[path] = existing.with_data(data)
        else:
            self._entries[path] = ArchiveEntry(path=path, data=data)

    def copy(self) -> "EpubArchive":
        return EpubArchive(self._entries)


def read_archive(data: bytes) -> EpubArchive:
    """
    Decode archive bytes

    Args:
        data: Raw EPUB bytes

    Returns:
        EpubArchive in archive order

    Raises:
        zipfile.BadZipFile: If data is not a valid ZIP archive
    """
    entries: Dict[str, ArchiveEntry] = {}
    with zipfile.ZipFile(io.BytesIO(data), 'r') as zip_ref:
        for info in zip_ref.infolist():
            if info.is_dir():
                continue
            entries[info.filename] = ArchiveEntry(
                path=info.filename,
                data=zip_ref.read(info),
                compress_type=info.compress_type,
                date_time=info.date_time,
                external_attr=info.external_attr,
            )
    return EpubArchive(entries)


def write_archive(archive: EpubArchive) -> bytes:
    """
    Encode an archive to bytes

    The mimetype entry goes first and uncompressed; when the input had none,
    the standard EPUB mimetype is written.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as epub_zip:
        mimetype = archive.get(MIMETYPE_ENTRY)
        mimetype_info = zipfile.ZipInfo(
            MIMETYPE_ENTRY,
            date_time=mimetype.date_time if mimetype else (1980, 1, 1, 0, 0, 0)
        )
        mimetype_info.compress_type = zipfile.ZIP_STORED
        epub_zip.writestr(mimetype_info, mimetype.data if mimetype else EPUB_MIMETYPE.encode('ascii'))

        for entry in archive.entries():
            if entry.path == MIMETYPE_ENTRY:
                continue
            epub_zip.writestr(entry.to_zipinfo(), entry.data)

    return buffer.getvalue()
