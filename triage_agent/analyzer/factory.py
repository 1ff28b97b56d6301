"""Categorizer selection from configuration."""

from typing import Union

from ..config.models import Config
from ..errors import ConfigError
from .gemini import GeminiCategorizer
from .ollama import OllamaCategorizer


def build_categorizer(config: Config) -> Union[GeminiCategorizer, OllamaCategorizer]:
    """Prefer Ollama if configured, fall back to Gemini."""
    provider = config.provider
    if provider.ollama_model:
        return OllamaCategorizer(
            provider.ollama_model,
            config.categories,
            base_url=provider.ollama_host,
        )
    if provider.gemini_api_key:
        return GeminiCategorizer(
            provider.gemini_api_key,
            config.categories,
            model=provider.gemini_model,
        )
    raise ConfigError("No categorizer configured. Set OLLAMA_MODEL or GEMINI_API_KEY in .env")
