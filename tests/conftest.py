"""
Pytest configuration and fixtures for all tests.

EPUB archives are built in memory, and providers are replaced by scripted
fakes so no test touches the network.
"""

import io
import zipfile
from typing import Callable, List, Optional, Sequence

import pytest

from flow_translate.core.epub import TranslationConfig
from flow_translate.core.llm.base import TranslationProvider, ProviderRequest


XHTML_TEMPLATE = '''<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body>
{body}
</body>
</html>'''


def create_container_xml(opf_path: str) -> str:
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
   <rootfiles>
      <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
   </rootfiles>
</container>'''


def create_opf(title: Optional[str], hrefs: Sequence[str]) -> str:
    manifest_items = ['<item id="css" href="Styles/style.css" media-type="text/css"/>']
    spine_items = []
    for i, href in enumerate(hrefs):
        manifest_items.append(f'<item id="chapter{i + 1}" href="{href}" media-type="application/xhtml+xml"/>')
        spine_items.append(f'<itemref idref="chapter{i + 1}"/>')

    title_line = f'<dc:title>{title}</dc:title>' if title is not None else ''
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    {title_line}
    <dc:language>en</dc:language>
    <dc:identifier id="BookId">test-book</dc:identifier>
  </metadata>
  <manifest>
    {chr(10).join('    ' + item for item in manifest_items)}
  </manifest>
  <spine>
    {chr(10).join('    ' + item for item in spine_items)}
  </spine>
</package>'''


def build_epub(
    chapters: Sequence[str],
    title: Optional[str] = "Test Book",
    content_dir: str = "OEBPS"
) -> bytes:
    """Build EPUB bytes with one XHTML file per chapter body.

    Args:
        chapters: Inner <body> markup of each chapter, in spine order
        title: dc:title, or None to omit it
        content_dir: Directory holding the package document ('' for root)
    """
    prefix = f"{content_dir}/" if content_dir else ""
    hrefs = [f"Text/chapter_{i + 1:03d}.xhtml" for i in range(len(chapters))]

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as epub:
        epub.writestr(zipfile.ZipInfo('mimetype'), 'application/epub+zip', compress_type=zipfile.ZIP_STORED)
        epub.writestr('META-INF/container.xml', create_container_xml(f"{prefix}content.opf"))
        epub.writestr(f"{prefix}content.opf", create_opf(title, hrefs))
        epub.writestr(f"{prefix}Styles/style.css", 'p { margin: 0; }')
        for i, (href, body) in enumerate(zip(hrefs, chapters)):
            epub.writestr(f"{prefix}{href}", XHTML_TEMPLATE.format(title=f"Chapter {i + 1}", body=body))
    return buffer.getvalue()


class ScriptedProvider(TranslationProvider):
    """Provider whose replies come from a Python callable instead of HTTP."""

    label = "Scripted"

    def __init__(self, responder: Optional[Callable[[str], str]] = None):
        super().__init__(api_token="test-token", model="test-model")
        self.responder = responder or (lambda text: text)
        self.calls: List[str] = []
        self.instructions: List[Optional[str]] = []
        self.closed = False

    def build_request(self, text, instructions=None):
        return ProviderRequest(url="http://scripted.invalid", headers={})

    def parse_response(self, data):
        return ""

    async def translate(self, text, instructions=None):
        self.calls.append(text)
        self.instructions.append(instructions)
        return self.responder(text)

    async def close(self):
        self.closed = True


class RecordingFactory:
    """provider_factory stand-in that hands out one ScriptedProvider."""

    def __init__(self, provider: ScriptedProvider):
        self.provider = provider
        self.calls = []

    def __call__(self, provider, api_token, model, client=None):
        self.calls.append((provider, api_token, model))
        return self.provider


class RecordingSecretStore:
    def __init__(self, plaintext: str = "plain-token"):
        self.plaintext = plaintext
        self.calls = []

    async def decrypt(self, secret):
        self.calls.append(secret)
        return self.plaintext


@pytest.fixture
def make_epub():
    """Factory fixture building EPUB bytes in memory."""
    return build_epub


@pytest.fixture
def config():
    return TranslationConfig(provider="anthropic", api_token="secret", model="test-model")


@pytest.fixture
def echo_provider():
    return ScriptedProvider()


def read_entry(epub_bytes: bytes, path: str) -> str:
    with zipfile.ZipFile(io.BytesIO(epub_bytes)) as zf:
        return zf.read(path).decode('utf-8')
