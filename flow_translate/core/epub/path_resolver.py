"""
Locate a spine section's entry inside the archive

Spine hrefs are relative to the package document while archive paths are
relative to the archive root, and document loaders differ in what URL they
report. The strategies below are tried in a fixed order and the first
existing path wins.
"""
import posixpath
from typing import Iterable, List, Optional, Tuple
from urllib.parse import unquote, urlsplit

from .constants import CONTENT_ROOT_PREFIXES, MARKUP_EXTENSIONS


def strip_url(url: str) -> str:
    """Drop scheme, host and leading slashes from a section URL.

    Nested schemes (``blob:http://host/...``) are unwrapped one at a time.
    """
    path = url
    parts = urlsplit(path)
    while parts.scheme or parts.netloc:
        path = parts.path
        parts = urlsplit(path)
    return unquote(path).lstrip('/')


def _filename(path: Optional[str]) -> str:
    if not path:
        return ''
    return posixpath.basename(path.split('#', 1)[0])


def _suffix_match(paths: Iterable[str], filename: str, extensions: Tuple[str, ...] = ()) -> Optional[str]:
    if not filename:
        return None
    for path in paths:
        if path != filename and not path.endswith('/' + filename):
            continue
        if extensions and not path.lower().endswith(extensions):
            continue
        return path
    return None


def candidate_paths(href: Optional[str], url: Optional[str]) -> List[Tuple[str, str]]:
    """Direct-lookup candidates as (strategy, path), in precedence order."""
    candidates = []
    if href:
        candidates.append(('href', href))
        for prefix in CONTENT_ROOT_PREFIXES:
            candidates.append((f'prefix:{prefix}', prefix + href))
    if url:
        candidates.append(('url', strip_url(url)))
    return candidates


def find_section_path(
    href: Optional[str],
    url: Optional[str],
    paths: Iterable[str]
) -> Optional[str]:
    """
    Resolve the archive path of a section

    Order:
        1. href verbatim
        2. OEBPS/ + href
        3. OPS/ + href
        4. URL with scheme and host stripped
        5. URL (or href) filename against .xhtml/.html paths
        6. href filename against every path

    Args:
        href: Section href as declared in the spine
        url: Resolved URL reported by the document loader, if any
        paths: Archive paths in archive order

    Returns:
        The first matching archive path, or None
    """
    paths = list(paths)
    path_set = set(paths)

    for _strategy, candidate in candidate_paths(href, url):
        if candidate and candidate in path_set:
            return candidate

    markup_match = _suffix_match(paths, _filename(url) or _filename(href), MARKUP_EXTENSIONS)
    if markup_match:
        return markup_match

    return _suffix_match(paths, _filename(href))
