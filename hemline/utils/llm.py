"""
LLM provider abstraction and JSON response parsing.

Provides a provider-agnostic interface for a single chat completion. Calls are made
exactly once: failures propagate to the caller, which decides how to report them.
"""

import json
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

MAX_OUTPUT_TOKENS = int(os.getenv("LLM_MAX_OUTPUT_TOKENS", "4096"))
DEFAULT_TEMPERATURE = 0.3


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response from the LLM (one request, no retry)."""
        return self._call_api(system_prompt, user_prompt)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - SDK only needed when this provider is selected
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=DEFAULT_TEMPERATURE,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider requesting JSON-object output."""

    _provider_prefix = "openai"

    def __init__(self, model: str = "gpt-4o-mini"):
        # Lazy import - SDK only needed when this provider is selected
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        # Custom base URL for proxies / compatible endpoints
        base_url = os.getenv("OPENAI_BASE_URL") or None

        self.client = openai.OpenAI(api_key=api_key, base_url=base_url)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=DEFAULT_TEMPERATURE,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, then provider-specific default)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai").lower()
    if model is None:
        model = os.getenv("LLM_MODEL") or None

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")


# --- Response Parsing ---


def parse_json_object(text: str) -> Optional[dict]:
    """
    Parse a JSON object from an LLM response, tolerating markdown code fences.

    Args:
        text: Raw LLM response text

    Returns:
        Parsed dict, or None if no JSON object could be recovered
    """
    text = (text or "").strip()
    if not text:
        return None

    candidates = [text]

    # Strip markdown code blocks
    unfenced = re.sub(r"^```(?:json)?\s*", "", text)
    unfenced = re.sub(r"\s*```$", "", unfenced)
    candidates.append(unfenced)

    # Outermost braces
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            result = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(result, dict):
            return result

    return None
