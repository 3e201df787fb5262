"""
Centralized configuration
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Get config directory (current working directory)
_config_dir = Path.cwd()
_env_file = _config_dir / '.env'

# Load .env file if it exists; real environment variables win
_dotenv_result = load_dotenv(_env_file)

DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if DEBUG_MODE:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug(f"Loaded .env from {_env_file.absolute()}: {_dotenv_result}")

# Provider configuration
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'anthropic')  # 'anthropic' or 'openai'
DEFAULT_MODEL = os.getenv('DEFAULT_MODEL', 'claude-sonnet-4-20250514')
ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY', '')
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')

# Translation defaults
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', '')
TRANSLATION_INSTRUCTIONS = os.getenv('TRANSLATION_INSTRUCTIONS', '')

# HTTP
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '900'))

# Provider endpoints
ANTHROPIC_API_ENDPOINT = 'https://api.anthropic.com/v1/messages'
ANTHROPIC_API_VERSION = '2023-06-01'
OPENAI_API_ENDPOINT = 'https://api.openai.com/v1/chat/completions'

# Shared generation parameters
MAX_OUTPUT_TOKENS = 16384
OPENAI_TEMPERATURE = 0.3

NAMESPACES = {
    'opf': 'http://www.idpf.org/2007/opf',
    'dc': 'http://purl.org/dc/elements/1.1/',
    'xhtml': 'http://www.w3.org/1999/xhtml',
    'epub': 'http://www.idpf.org/2007/ops',
    'container': 'urn:oasis:names:tc:opendocument:xmlns:container',
}

# Elements whose text is never sent for translation
IGNORED_TAGS_EPUB = [
    '{http://www.w3.org/1999/xhtml}script',
    '{http://www.w3.org/1999/xhtml}style',
    'script',
    'style',
]

if DEBUG_MODE:
    _config_logger.debug(f"LLM_PROVIDER={LLM_PROVIDER} DEFAULT_MODEL={DEFAULT_MODEL} "
                         f"REQUEST_TIMEOUT={REQUEST_TIMEOUT}")
