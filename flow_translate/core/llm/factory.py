"""
Provider selection.

Callers pick a back-end with a Provider value (or its string name) and get
back a TranslationProvider; nothing outside this package branches on the
provider identity.
"""

from enum import Enum
from typing import Optional, Union
import httpx

from flow_translate.config import REQUEST_TIMEOUT
from .base import TranslationProvider
from .providers.anthropic import AnthropicProvider
from .providers.openai import OpenAIProvider


class Provider(Enum):
    """Supported translation back-ends"""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"

    @classmethod
    def parse(cls, value: Union["Provider", str, None]) -> Optional["Provider"]:
        """Coerce a provider name to a Provider, returning None when unknown."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_PROVIDER_CLASSES = {
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.OPENAI: OpenAIProvider,
}


def create_provider(
    provider: Union[Provider, str],
    api_token: str,
    model: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = REQUEST_TIMEOUT
) -> TranslationProvider:
    """
    Create a translation provider.

    Args:
        provider: Provider value or name ('anthropic', 'openai')
        api_token: Plaintext API token
        model: Model name
        client: Optional shared httpx client
        timeout: Request timeout in seconds

    Returns:
        Configured TranslationProvider

    Raises:
        ValueError: If the provider is not supported
    """
    resolved = Provider.parse(provider)
    if resolved is None:
        raise ValueError(f"Unsupported provider: {provider!r}")
    provider_class = _PROVIDER_CLASSES[resolved]
    return provider_class(api_token=api_token, model=model, client=client, timeout=timeout)
