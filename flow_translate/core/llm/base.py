"""
Base class for translation providers.

This module defines the abstract base class both remote back-ends implement.
The base class owns the HTTP round trip and the mapping of every outcome to
the classified error taxonomy; subclasses only describe their request and
response shapes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import time
import httpx

from flow_translate.config import REQUEST_TIMEOUT
from flow_translate.utils.unified_logger import LogType, debug
from .exceptions import (
    ProviderError,
    UnknownProviderError,
    error_for_status,
    network_error,
)


@dataclass
class ProviderRequest:
    """A fully built HTTP request for one translation call"""
    url: str
    headers: Dict[str, str]
    payload: Dict[str, Any] = field(default_factory=dict)


def extract_error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response body.

    Looks at ``error.message``, then ``message``, then falls back to the raw
    body text.
    """
    text = response.text
    try:
        data = response.json()
    except ValueError:
        return text or "Unknown error"

    if isinstance(data, dict):
        error_detail = data.get("error")
        if isinstance(error_detail, dict) and error_detail.get("message"):
            return str(error_detail["message"])
        if data.get("message"):
            return str(data["message"])
    return text or "Unknown error"


class TranslationProvider(ABC):
    """Abstract base class for translation providers"""

    #: Display name used in user-facing error messages
    label = "Provider"

    def __init__(self, api_token: str, model: str,
                 client: Optional[httpx.AsyncClient] = None,
                 timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the provider.

        Args:
            api_token: Plaintext API token
            model: Model name/identifier
            client: Optional shared HTTP client (not closed by this provider)
            timeout: Request timeout in seconds
        """
        self.api_token = api_token
        self.model = model
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def close(self):
        """Close the HTTP client if this provider created it"""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TranslationProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @abstractmethod
    def build_request(self, text: str, instructions: Optional[str] = None) -> ProviderRequest:
        """Build the HTTP request translating ``text``."""

    @abstractmethod
    def parse_response(self, data: Dict[str, Any]) -> str:
        """Extract the translated text from a successful response body."""

    async def translate(self, text: str, instructions: Optional[str] = None) -> str:
        """
        Translate text with this provider.

        Whitespace-only input is returned unchanged without a network call.

        Args:
            text: Text to translate
            instructions: Optional user instructions for the system prompt

        Returns:
            Translated text

        Raises:
            ProviderError: Always classified; never an unclassified exception
        """
        if not text.strip():
            return text

        request = self.build_request(text, instructions)
        debug("Provider request", LogType.PROVIDER_REQUEST, {
            'provider': self.label,
            'model': self.model,
            'chars': len(text)
        })

        start_time = time.time()
        try:
            client = await self._get_client()
            response = await client.post(request.url, headers=request.headers, json=request.payload)
        except httpx.TransportError as e:
            raise network_error(e) from e
        except Exception as e:
            raise UnknownProviderError(f"Unexpected error: {e}") from e

        if not response.is_success:
            raise error_for_status(response.status_code, self.label, extract_error_message(response))

        try:
            content = self.parse_response(response.json())
        except ProviderError:
            raise
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise UnknownProviderError(f"Unexpected error: malformed {self.label} response ({e})") from e

        if not isinstance(content, str):
            raise UnknownProviderError(f"Unexpected error: {self.label} returned no text content")

        debug("Provider response", LogType.PROVIDER_RESPONSE, {
            'execution_time': time.time() - start_time,
            'response': content
        })
        return content
