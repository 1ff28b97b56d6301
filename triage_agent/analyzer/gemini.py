"""Gemini-powered message categorizer using the google-genai SDK."""

import logging

from google import genai
from google.genai import types

from ..errors import AnalysisError
from .models import Categorization
from .parsing import build_system_prompt, build_user_prompt, parse_categorization

logger = logging.getLogger(__name__)


class GeminiCategorizer:
    """Gemini AI customer message categorizer."""
    
    def __init__(self, api_key: str, categories: list[str], model: str = "gemini-2.0-flash"):
        self.categories = categories
        self.model = model
        self.client = genai.Client(api_key=api_key)
        self.system_prompt = build_system_prompt(categories)
    
    async def categorize(self, message: str) -> Categorization:
        """Categorize a customer message; raises AnalysisError on any failure."""
        logger.debug("Gemini categorize (%s, %d chars)", self.model, len(message))
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_user_prompt(message),
                config=types.GenerateContentConfig(
                    system_instruction=self.system_prompt,
                    temperature=0,
                    response_mime_type="application/json",
                ),
            )
        except Exception as e:
            raise AnalysisError(f"Gemini request failed: {e}") from e
        
        try:
            return parse_categorization(response.text or "", self.categories)
        except ValueError as e:
            raise AnalysisError(f"Could not parse Gemini response: {e}") from e
