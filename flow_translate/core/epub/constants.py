"""
Constants for EPUB translation processing

This module defines the magic numbers and marker strings used throughout the
EPUB translation pipeline.
"""

# Batch sizing (characters)
MIN_CHARS_PER_BATCH = 60000
"""A batch at or above this size closes early once it nears MAX_CHARS_PER_BATCH"""

MAX_CHARS_PER_BATCH = 80000
"""Hard ceiling for a batch, except for a single oversized unit"""

EARLY_CLOSE_RATIO = 0.9
"""Fraction of MAX_CHARS_PER_BATCH that closes a batch already past MIN"""

TEXT_UNIT_DELIMITER = '<<<TEXTNODE_SEPARATOR>>>'
"""Sentinel joining text units inside one provider request"""

# Run policy
MAX_FAILED_SECTION_RATIO = 0.5
"""Abort once failed sections exceed this share of all sections"""

# Archive layout
MIMETYPE_ENTRY = 'mimetype'
EPUB_MIMETYPE = 'application/epub+zip'
CONTAINER_PATH = 'META-INF/container.xml'

CONTENT_ROOT_PREFIXES = ('OEBPS/', 'OPS/')
"""Conventional content directories tried when resolving a section href"""

MARKUP_EXTENSIONS = ('.xhtml', '.html')

DEFAULT_TITLE = 'Untitled'
