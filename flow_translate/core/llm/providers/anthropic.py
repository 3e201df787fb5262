"""
Anthropic provider implementation.

This module provides the AnthropicProvider class for the Anthropic
messages API.
"""

from typing import Any, Dict, Optional

from flow_translate.config import ANTHROPIC_API_ENDPOINT, ANTHROPIC_API_VERSION, MAX_OUTPUT_TOKENS
from flow_translate.prompts import build_anthropic_system_prompt
from ..base import TranslationProvider, ProviderRequest


class AnthropicProvider(TranslationProvider):
    """
    Provider for the Anthropic messages API.

    Example:
        >>> provider = AnthropicProvider(api_token="sk-ant-...", model="claude-sonnet-4-20250514")
        >>> text = await provider.translate("Hello")
    """

    label = "Anthropic"
    api_endpoint = ANTHROPIC_API_ENDPOINT

    def build_request(self, text: str, instructions: Optional[str] = None) -> ProviderRequest:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_token,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }
        payload = {
            "model": self.model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "messages": [
                {"role": "user", "content": text},
            ],
            "system": build_anthropic_system_prompt(instructions),
        }
        return ProviderRequest(url=self.api_endpoint, headers=headers, payload=payload)

    def parse_response(self, data: Dict[str, Any]) -> str:
        return data["content"][0]["text"]
