"""
Ollama-powered message categorizer.
- STRICT JSON output (single JSON object only)
- Robust parsing (extracts JSON even if model adds stray text)
- Retries on invalid / empty output
- Blocking HTTP call runs in a worker thread so the event loop stays free
"""

import asyncio
import logging
import os
import time
from typing import Any, Dict, Optional

import requests

from ..errors import AnalysisError
from .models import Categorization
from .parsing import build_system_prompt, build_user_prompt, parse_categorization

logger = logging.getLogger(__name__)


class OllamaCategorizer:
    """LLM categorizer backed by a local Ollama server."""

    def __init__(
        self,
        model: str,
        categories: list[str],
        base_url: Optional[str] = None,
        request_timeout: int = 120,
        max_retries: int = 2,
        retry_backoff_sec: float = 0.4,
    ):
        self.model = model
        self.categories = categories
        self.base_url = base_url or os.getenv("OLLAMA_HOST", "http://localhost:11434")
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_backoff_sec = retry_backoff_sec
        self.system_prompt = build_system_prompt(categories)

    async def categorize(self, message: str) -> Categorization:
        """Categorize a customer message; raises AnalysisError after exhausting retries."""
        return await asyncio.to_thread(self._categorize_blocking, message)

    def _categorize_blocking(self, message: str) -> Categorization:
        user_prompt = build_user_prompt(message)
        last_err: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                result = self._call_ollama(user_prompt=user_prompt)
                raw = (result.get("response") or "").strip()
                if not raw:
                    raise ValueError("Empty LLM output (response was blank)")
                return parse_categorization(raw, self.categories)

            except (requests.RequestException, ValueError) as e:
                last_err = e
                logger.warning("Ollama attempt %d/%d failed: %s", attempt + 1, self.max_retries + 1, e)
                if attempt < self.max_retries:
                    time.sleep(self.retry_backoff_sec * (attempt + 1))

        raise AnalysisError(f"Ollama categorization failed after retries: {last_err}") from last_err

    def _call_ollama(self, user_prompt: str) -> Dict[str, Any]:
        """Low-level call to Ollama /api/generate"""
        payload = {
            "model": self.model,
            "system": self.system_prompt,
            "prompt": user_prompt,
            "stream": False,
            "think": False,
            "format": "json",
            "options": {
                "temperature": 0,
                "num_predict": 512,
            },
        }

        response = requests.post(
            f"{self.base_url}/api/generate",
            json=payload,
            timeout=self.request_timeout,
        )
        response.raise_for_status()
        return response.json()
