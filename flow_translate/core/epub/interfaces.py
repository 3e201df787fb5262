"""
Protocol interfaces for the collaborators the translation core consumes.

The core never decrypts credentials or parses archive structure itself; it
talks to these contracts, enabling alternative implementations in tests and
in host applications.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable
from lxml import etree


@runtime_checkable
class SecretStore(Protocol):
    """Interface for credential decryption."""

    async def decrypt(self, secret: str) -> str:
        """Return the plaintext for ``secret``.

        Implementations may swallow internal errors and return an empty
        string; the core treats empty as a decryption failure.
        """
        ...


class ParsedDocument(Protocol):
    """A navigable, mutable content document."""

    @property
    def root(self) -> etree._Element:
        """Element translation starts from (``<body>`` when present)."""
        ...

    def serialize(self) -> bytes:
        """Serialize the (possibly mutated) document back to markup bytes."""
        ...


class Section(Protocol):
    """One spine entry."""

    href: str
    url: Optional[str]

    async def load(self) -> Optional[ParsedDocument]:
        """Load and parse the section's content document."""
        ...


@dataclass
class LoadedEpub:
    """What the document loader exposes about an archive.

    Attributes:
        title: Title from the package metadata, if any
        sections: Spine sections in reading order
    """
    title: Optional[str] = None
    sections: List[Section] = field(default_factory=list)


class DocumentLoader(Protocol):
    """Interface for turning archive bytes into spine sections."""

    async def load(self, data: bytes) -> LoadedEpub:
        """Open an archive.

        Raises:
            Exception: Any error when the archive cannot be opened
        """
        ...
