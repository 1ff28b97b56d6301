"""Correction tracking against the original automated suggestion."""

from typing import Iterable, Optional, Sequence

from ..rules.models import DEFAULT_CATEGORIES, DEFAULT_URGENCIES
from .models import AnalysisResult, CorrectionFlags, Suggestion


def _merge_options(defaults: Iterable[str], *extras: Optional[str]) -> list[str]:
    """Defaults first, then unseen non-empty extras in first-seen order."""
    options = list(dict.fromkeys(defaults))
    for value in extras:
        if value and value not in options:
            options.append(value)
    return options


class CorrectionTracker:
    """
    Holds the original (category, urgency) suggestion of the current run and
    answers "is this field still AI-matched" for the live result.

    All query methods are pure reads.
    """
    
    def __init__(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        urgencies: Sequence[str] = DEFAULT_URGENCIES,
    ):
        self.categories = tuple(categories)
        self.urgencies = tuple(urgencies)
        self._original: Optional[Suggestion] = None
    
    @property
    def original(self) -> Optional[Suggestion]:
        return self._original
    
    def capture(self, result: AnalysisResult) -> Suggestion:
        """Record the baseline for a freshly completed run."""
        self._original = Suggestion(category=result.category, urgency=result.urgency)
        return self._original
    
    def reset(self) -> None:
        self._original = None
    
    def category_matches(self, result: AnalysisResult) -> bool:
        return self._original is not None and result.category == self._original.category
    
    def urgency_matches(self, result: AnalysisResult) -> bool:
        return self._original is not None and result.urgency == self._original.urgency
    
    def flags(self, result: AnalysisResult) -> CorrectionFlags:
        return CorrectionFlags(
            category_matches=self.category_matches(result),
            urgency_matches=self.urgency_matches(result),
        )
    
    def available_category_options(self, result: Optional[AnalysisResult] = None) -> list[str]:
        if result is None:
            return list(self.categories)
        original = self._original.category if self._original else None
        return _merge_options(self.categories, original, result.category)
    
    def available_urgency_options(self, result: Optional[AnalysisResult] = None) -> list[str]:
        if result is None:
            return list(self.urgencies)
        original = self._original.urgency if self._original else None
        return _merge_options(self.urgencies, original, result.urgency)
