"""Categorization result models."""

from dataclasses import dataclass


@dataclass
class Categorization:
    """Result from AI message categorization."""
    category: str
    reasoning: str  # Markdown-formatted rationale
