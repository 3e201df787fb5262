"""
Prompt texts sent to the translation providers.
"""
from typing import Optional

BASE_ROLE = "You are a professional translator."

DEFAULT_TASK = (
    "Translate the following text while preserving formatting, HTML tags, "
    "and the overall meaning. Only return the translated text, nothing else."
)

DEFAULT_SYSTEM_PROMPT = f"{BASE_ROLE} {DEFAULT_TASK}"


def with_target_language(instructions: Optional[str], target_language: Optional[str]) -> Optional[str]:
    """Prefix user instructions with the target language, when one is configured."""
    if not target_language:
        return instructions
    language_line = f"Translate into {target_language}."
    if instructions:
        return f"{language_line} {instructions}"
    return language_line


def build_anthropic_system_prompt(instructions: Optional[str] = None) -> str:
    """System prompt for the Anthropic messages API.

    User instructions replace the default task description.
    """
    if instructions:
        return f"{BASE_ROLE} {instructions}"
    return DEFAULT_SYSTEM_PROMPT


def build_openai_system_prompt(instructions: Optional[str] = None) -> str:
    """System prompt for the OpenAI chat completions API.

    User instructions are followed by the default task description.
    """
    if instructions:
        return f"{BASE_ROLE} {instructions} {DEFAULT_TASK}"
    return DEFAULT_SYSTEM_PROMPT


def build_batch_instructions(delimiter: str, instructions: Optional[str] = None) -> str:
    """Instructions for a delimiter-packed batch of text segments."""
    if instructions:
        return (
            f"{instructions}\n\nIMPORTANT: Keep the exact delimiter \"{delimiter}\" "
            f"between text segments. Do not translate or modify this delimiter."
        )
    return (
        f"Translate the following text segments. Keep the exact delimiter \"{delimiter}\" "
        f"between segments. Do not translate or modify this delimiter."
    )
