"""
Default document loader

Reads the container and package documents with lxml and exposes the spine as
lazily parsed sections. This is the collaborator the orchestrator uses unless
a host application supplies its own.
"""
import asyncio
import io
import posixpath
from typing import Dict, List, Optional

from lxml import etree

from flow_translate.config import NAMESPACES
from .archive import EpubArchive, read_archive
from .constants import CONTAINER_PATH
from .exceptions import SectionLoadError
from .interfaces import LoadedEpub
from .path_resolver import strip_url
from .rebuilder import find_package_document

XHTML_BODY = f"{{{NAMESPACES['xhtml']}}}body"


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(recover=True, remove_blank_text=False, resolve_entities=False)


class XhtmlDocument:
    """Parsed content document backed by an lxml tree."""

    def __init__(self, tree: etree._ElementTree):
        self.tree = tree

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "") -> "XhtmlDocument":
        try:
            tree = etree.parse(io.BytesIO(data), _xml_parser())
        except etree.XMLSyntaxError as e:
            raise SectionLoadError(f"Failed to parse section {name}: {e}", section=name) from e
        if tree.getroot() is None:
            raise SectionLoadError(f"Section {name} has no content", section=name)
        return cls(tree)

    @property
    def root(self) -> etree._Element:
        document_element = self.tree.getroot()
        body = document_element.find(XHTML_BODY)
        if body is None:
            body = document_element.find('body')
        return body if body is not None else document_element

    def serialize(self) -> bytes:
        return etree.tostring(self.tree, encoding='utf-8', xml_declaration=True)


class SpineSection:
    """
    One spine entry

    Attributes:
        href: Manifest href (relative to the package document)
        url: Archive-absolute path of the content document
    """

    def __init__(self, href: str, url: str, archive: EpubArchive):
        self.href = href
        self.url = url
        self.archive_path = strip_url(url)
        self._archive = archive

    async def load(self) -> XhtmlDocument:
        if self.archive_path not in self._archive:
            raise SectionLoadError(f"Section file missing from archive: {self.archive_path}", section=self.href)
        return XhtmlDocument.from_bytes(self._archive.read(self.archive_path), self.href)

    def __repr__(self) -> str:
        return f"SpineSection(href={self.href!r}, url={self.url!r})"


def find_opf_path(archive: EpubArchive) -> Optional[str]:
    """Locate the package document via META-INF/container.xml, then by name."""
    if CONTAINER_PATH in archive:
        container = etree.fromstring(archive.read(CONTAINER_PATH), _xml_parser())
        if container is not None:
            rootfile = container.find('.//container:rootfile', namespaces=NAMESPACES)
            if rootfile is not None:
                full_path = rootfile.get('full-path')
                if full_path and full_path in archive:
                    return full_path
    return find_package_document(archive)


def parse_package(opf_data: bytes, opf_path: str, archive: EpubArchive) -> LoadedEpub:
    """Read title and spine order from the package document."""
    opf_root = etree.fromstring(opf_data, _xml_parser())
    if opf_root is None:
        raise ValueError(f"Package document {opf_path} could not be parsed")

    title_el = opf_root.find('.//dc:title', namespaces=NAMESPACES)
    title = title_el.text.strip() if title_el is not None and title_el.text else None

    manifest = opf_root.find('.//opf:manifest', namespaces=NAMESPACES)
    spine = opf_root.find('.//opf:spine', namespaces=NAMESPACES)
    if manifest is None or spine is None:
        raise ValueError("Manifest or spine missing in package document")

    manifest_hrefs: Dict[str, str] = {
        item.get('id'): item.get('href')
        for item in manifest.findall('opf:item', namespaces=NAMESPACES)
        if item.get('id') and item.get('href')
    }

    opf_dir = posixpath.dirname(opf_path)
    sections: List[SpineSection] = []
    for itemref in spine.findall('opf:itemref', namespaces=NAMESPACES):
        href = manifest_hrefs.get(itemref.get('idref'))
        if not href:
            continue
        resolved = posixpath.normpath(posixpath.join(opf_dir, href.split('#', 1)[0]))
        sections.append(SpineSection(href=href, url='/' + resolved, archive=archive))

    return LoadedEpub(title=title, sections=sections)


class EpubDocumentLoader:
    """Opens EPUB bytes and exposes metadata title and spine sections."""

    async def load(self, data: bytes) -> LoadedEpub:
        archive = await asyncio.to_thread(read_archive, data)
        opf_path = find_opf_path(archive)
        if opf_path is None:
            raise FileNotFoundError("content.opf not found in EPUB")
        return parse_package(archive.read(opf_path), opf_path, archive)
