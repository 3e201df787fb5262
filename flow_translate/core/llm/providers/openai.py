"""
OpenAI provider implementation.

This module provides the OpenAIProvider class for the OpenAI chat
completions API.
"""

from typing import Any, Dict, Optional

from flow_translate.config import OPENAI_API_ENDPOINT, MAX_OUTPUT_TOKENS, OPENAI_TEMPERATURE
from flow_translate.prompts import build_openai_system_prompt
from ..base import TranslationProvider, ProviderRequest


class OpenAIProvider(TranslationProvider):
    """OpenAI chat completions provider"""

    label = "OpenAI"
    api_endpoint = OPENAI_API_ENDPOINT

    def build_request(self, text: str, instructions: Optional[str] = None) -> ProviderRequest:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_openai_system_prompt(instructions)},
                {"role": "user", "content": text},
            ],
            "max_tokens": MAX_OUTPUT_TOKENS,
            "temperature": OPENAI_TEMPERATURE,
        }
        return ProviderRequest(url=self.api_endpoint, headers=headers, payload=payload)

    def parse_response(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]
