"""
Text unit extraction and write-back

A parsed document is flattened once into an immutable, ordered tuple of
TextUnit references. Translation never touches the tree while walking it;
results are written back afterwards, positionally, by apply_translations().
"""
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple
from lxml import etree

from flow_translate.config import IGNORED_TAGS_EPUB

TEXT_SLOT = 'text'
TAIL_SLOT = 'tail'


@dataclass(frozen=True)
class TextUnit:
    """
    Addressable text node

    Attributes:
        node: Element owning the text
        slot: 'text' (before the first child) or 'tail' (after the element)
        text: Content at extraction time
    """
    node: etree._Element
    slot: str
    text: str

    def __len__(self) -> int:
        return len(self.text)


def _is_element(node) -> bool:
    # Comments, processing instructions and entities carry a non-string tag
    return isinstance(node.tag, str)


def _walk(element: etree._Element) -> Iterator[Tuple[etree._Element, str]]:
    """
    Yield (node, slot) pairs in document order below ``element``

    The element's own text comes first, then each child subtree followed by
    that child's tail.
    """
    if element.text is not None:
        yield element, TEXT_SLOT

    for child in element:
        if _is_element(child) and child.tag not in IGNORED_TAGS_EPUB:
            yield from _walk(child)
        if child.tail is not None:
            yield child, TAIL_SLOT


def extract_text_units(root: etree._Element) -> Tuple[TextUnit, ...]:
    """
    Collect translatable text units below ``root`` in document order

    Units whose content is empty after stripping are skipped. The root's own
    tail lies outside the document part being translated and is never
    included.

    Args:
        root: Element to start from (usually <body>)

    Returns:
        Tuple of TextUnit in depth-first document order
    """
    units: List[TextUnit] = []
    for node, slot in _walk(root):
        text = node.text if slot == TEXT_SLOT else node.tail
        if text and text.strip():
            units.append(TextUnit(node=node, slot=slot, text=text))
    return tuple(units)


def apply_translations(units: Sequence[TextUnit], texts: Sequence[str]) -> int:
    """
    Write translated texts back into the document

    Args:
        units: Units from extract_text_units()
        texts: Replacement text for each unit, same order and length

    Returns:
        Number of units whose content changed

    Raises:
        ValueError: If the sequences differ in length
    """
    if len(units) != len(texts):
        raise ValueError(f"Expected {len(units)} texts, got {len(texts)}")

    changed = 0
    for unit, text in zip(units, texts):
        if text == unit.text:
            continue
        if unit.slot == TEXT_SLOT:
            unit.node.text = text
        else:
            unit.node.tail = text
        changed += 1
    return changed
