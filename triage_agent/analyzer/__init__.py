"""Support Triage Agent - Categorizer package."""

from .factory import build_categorizer
from .gemini import GeminiCategorizer
from .ollama import OllamaCategorizer
from .models import Categorization

__all__ = ["build_categorizer", "GeminiCategorizer", "OllamaCategorizer", "Categorization"]
