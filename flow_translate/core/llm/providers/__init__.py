"""
Translation Provider Implementations

Providers:
    - anthropic: Anthropic messages API
    - openai: OpenAI chat completions API
"""

__all__ = []
