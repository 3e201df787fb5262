"""Unit tests for text unit extraction and write-back."""

import pytest
from lxml import etree

from flow_translate.core.epub.text_extractor import (
    TEXT_SLOT,
    TAIL_SLOT,
    extract_text_units,
    apply_translations,
)

XHTML_NS = "http://www.w3.org/1999/xhtml"


def body_of(inner: str) -> etree._Element:
    root = etree.fromstring(f'<html xmlns="{XHTML_NS}"><body>{inner}</body></html>')
    return root.find(f"{{{XHTML_NS}}}body")


class TestExtraction:

    def test_document_order(self):
        body = body_of("<p>Hello <b>bold</b> world</p><p>Second</p>")
        units = extract_text_units(body)

        assert [u.text for u in units] == ["Hello ", "bold", " world", "Second"]
        assert [u.slot for u in units] == [TEXT_SLOT, TEXT_SLOT, TAIL_SLOT, TEXT_SLOT]

    def test_whitespace_only_nodes_skipped(self):
        body = body_of("\n  <p>One</p>\n  <p>  </p>\n")
        units = extract_text_units(body)

        assert [u.text for u in units] == ["One"]

    def test_script_and_style_excluded_but_tails_kept(self):
        body = body_of("<p>Before</p><script>var x = 1;</script>after script"
                       "<style>p {}</style><p>End</p>")
        units = extract_text_units(body)

        assert [u.text for u in units] == ["Before", "after script", "End"]

    def test_comment_contributes_only_tail(self):
        body = body_of("<p>Text<!-- a note -->more</p>")
        units = extract_text_units(body)

        assert [u.text for u in units] == ["Text", "more"]

    def test_root_tail_not_included(self):
        root = etree.fromstring("<div><span>inside</span></div>")
        span = root[0]
        span.tail = "outside"

        assert [u.text for u in extract_text_units(span)] == ["inside"]

    def test_units_are_immutable(self):
        units = extract_text_units(body_of("<p>Hi</p>"))
        with pytest.raises(Exception):
            units[0].text = "changed"


class TestWriteBack:

    def test_positional_write_back(self):
        body = body_of("<p>Hello <b>World</b>!</p>")
        units = extract_text_units(body)

        changed = apply_translations(units, ["Bonjour ", "Monde", "!"])

        assert changed == 2
        p = body[0]
        assert p.text == "Bonjour "
        assert p[0].text == "Monde"
        assert p[0].tail == "!"

    def test_markup_untouched(self):
        body = body_of('<p class="x">A <a href="n.xhtml">link</a></p>')
        units = extract_text_units(body)
        apply_translations(units, [u.text.upper() for u in units])

        serialized = etree.tostring(body, encoding="unicode")
        assert 'class="x"' in serialized
        assert 'href="n.xhtml"' in serialized
        assert ">LINK</a>" in serialized

    def test_length_mismatch_raises(self):
        units = extract_text_units(body_of("<p>One</p><p>Two</p>"))
        with pytest.raises(ValueError):
            apply_translations(units, ["Uno"])
