"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for text-generation calls and helpers
for parsing structured responses. Credentials are always supplied by the
caller; calls are made once with no retry and no timeout.
"""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import requests

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

# --- LLM Provider Classes ---


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
    - Set _provider_prefix class attribute (e.g., "anthropic", "gemini")
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

    def generate(self, user_prompt: str, system_prompt: str = "") -> LLMResponse:
        """Generate a response from the LLM."""
        return self._call_api(system_prompt, user_prompt)


class GeminiProvider(LLMProvider):
    """Google Gemini provider over the public REST endpoint."""

    _provider_prefix = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        if not api_key:
            raise ValueError("Gemini API key not provided")
        self.api_key = api_key
        self.session = requests.Session()
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        prompt = f"{system_prompt}\n\n{user_prompt}" if system_prompt else user_prompt
        response = self.session.post(
            GEMINI_ENDPOINT.format(model=self.model),
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        payload = response.json()

        content = payload["candidates"][0]["content"]["parts"][0]["text"]
        usage = payload.get("usageMetadata", {})
        return LLMResponse(
            content=content,
            model=self.model,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        if not api_key:
            raise ValueError("Anthropic API key not provided")

        self.client = anthropic.Anthropic(api_key=api_key)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        kwargs = {"system": system_prompt} if system_prompt else {}
        response = self.client.messages.create(
            model=self.model,
            max_tokens=2048,
            messages=[{"role": "user", "content": user_prompt}],
            **kwargs,
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    _provider_prefix = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        if not api_key:
            raise ValueError("OpenAI API key not provided")

        self.client = openai.OpenAI(api_key=api_key)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=2048,
            messages=messages,
        )
        return LLMResponse(
            content=response.choices[0].message.content,
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---

PROVIDERS = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: str, api_key: str, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "gemini", "anthropic" or "openai"
        api_key: Caller-supplied credential
        model: Model name (default: provider-specific default)

    Returns:
        LLMProvider instance
    """
    provider_cls = PROVIDERS.get(provider_name.lower())
    if provider_cls is None:
        raise ValueError(f"Unknown provider: {provider_name}. Use one of {sorted(PROVIDERS)}")

    return provider_cls(api_key=api_key, model=model) if model else provider_cls(api_key=api_key)


# --- Response Parsing Utilities ---


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around a response."""
    text = re.sub(r"```json\n?", "", text)
    text = re.sub(r"```\n?", "", text)
    return text.strip()


def parse_json_array(text: str) -> list:
    """
    Parse a JSON array (of any item type) from an LLM response.

    Tries the whole (fence-stripped) text first, then the outermost [...] span.

    Raises:
        ValueError: If no JSON array can be recovered
    """
    text = strip_code_fences(text)

    try:
        result = json.loads(text)
        if isinstance(result, list):
            return result
    except json.JSONDecodeError:
        pass

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, list):
                return result
        except json.JSONDecodeError:
            pass

    raise ValueError("Response does not contain a JSON array")


def parse_comma_list(text: str, max_length: Optional[int] = None) -> list[str]:
    """
    Split a comma-separated response into trimmed, non-empty items.

    Args:
        text: LLM response text
        max_length: Drop items longer than this many characters (None = keep all)
    """
    items = [item.strip() for item in text.split(",")]
    items = [item for item in items if item]
    if max_length is not None:
        items = [item for item in items if len(item) <= max_length]
    return items
