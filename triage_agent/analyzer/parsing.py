"""Prompt construction and response parsing shared by all categorizers."""

import json
import re
from typing import Any, Dict

from .models import Categorization


SYSTEM_PROMPT_TEMPLATE = """You are a customer-support triage assistant.

Classify the customer message into exactly one category.

AVAILABLE CATEGORIES:
{categories}

If none of the categories fit, you MAY answer with a short new category label.

OUTPUT RULES:
- Output ONLY a single valid JSON object. No code blocks.
- "reasoning" is a short markdown explanation (max 3 bullet points).

REQUIRED JSON SCHEMA:
{{
  "category": "<category>",
  "reasoning": "<markdown explanation>"
}}
"""


def build_system_prompt(categories: list[str]) -> str:
    """Render the system prompt for the given category list."""
    return SYSTEM_PROMPT_TEMPLATE.format(
        categories="\n".join(f"- {c}" for c in categories)
    )


def build_user_prompt(message: str, max_chars: int = 2000) -> str:
    """Render the user prompt, truncating very long messages."""
    return (
        "Classify this customer message. Output ONLY the JSON object.\n\n"
        "Message:\n"
        f"{message.strip()[:max_chars]}"
    )


def parse_categorization(response_text: str, categories: list[str]) -> Categorization:
    """
    Parse a JSON categorization response.

    Raises ValueError when no usable category can be extracted. Labels outside
    ``categories`` are kept as-is; a case-insensitive match is normalised to
    the configured spelling.
    """
    data = extract_json_object(response_text)

    category = str(data.get("category") or "").strip()
    if not category:
        raise ValueError("Response has no category")

    reasoning = data.get("reasoning", "")
    if isinstance(reasoning, list):
        reasoning = "\n".join(f"- {item}" for item in reasoning)
    reasoning = str(reasoning or "").strip()

    for known in categories:
        if known.lower() == category.lower():
            category = known
            break

    return Categorization(category=category, reasoning=reasoning)


_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_CHAR_FIXES = {"\ufeff": "", "“": '"', "”": '"', "’": "'"}


def _clean_llm_text(text: str) -> str:
    """Drop code fences, smart quotes, BOMs and trailing commas."""
    text = _CODE_FENCE.sub("", text or "")
    for bad, good in _CHAR_FIXES.items():
        text = text.replace(bad, good)
    return _TRAILING_COMMA.sub(r"\1", text)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Return the first decodable JSON object in an LLM response.

    Each ``{`` is tried as a start position in turn, so stray braces in prose
    before the real object are skipped.
    """
    cleaned = _clean_llm_text(text)
    decoder = json.JSONDecoder()
    start = cleaned.find("{")
    if start < 0:
        raise ValueError("No JSON found in response")

    last_err = None
    while start >= 0:
        try:
            data, _ = decoder.raw_decode(cleaned, start)
        except json.JSONDecodeError as e:
            last_err = e
        else:
            if isinstance(data, dict):
                return data
        start = cleaned.find("{", start + 1)

    raise ValueError(f"Invalid JSON: {last_err}")
