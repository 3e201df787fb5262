"""
Utility modules

Note: To prevent circular import issues, we do not re-export translate_epub_file
from file_utils here. Import it directly from its module:

    from flow_translate.utils.file_utils import translate_epub_file

Dependency order:
    unified_logger, secret_store (no deps) → core → file_utils
"""

__all__ = []
