"""Analysis orchestrator - drives one message through all suggestion providers."""

import logging

from ..errors import AnalysisError, ValidationError
from .models import AnalysisResult, utc_timestamp

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """
    Stateless pipeline: categorizer -> urgency scorer -> action templater.

    Providers are duck-typed:
      - categorizer: ``async categorize(message) -> Categorization``
      - scorer: ``score(message) -> str``
      - templater: ``recommend(category) -> str``

    Any provider failure aborts the run with AnalysisError; no partial result
    is ever returned.
    """
    
    def __init__(self, categorizer, scorer, templater):
        self.categorizer = categorizer
        self.scorer = scorer
        self.templater = templater
    
    async def run_analysis(self, message: str) -> AnalysisResult:
        """Analyze a message and return a fully populated result."""
        if not message or not message.strip():
            raise ValidationError("Please enter a message to analyze")
        
        # Step 1: category + reasoning (the only suspension point)
        try:
            categorization = await self.categorizer.categorize(message)
        except AnalysisError:
            logger.warning("Categorization failed", exc_info=True)
            raise
        except Exception as e:
            logger.warning("Categorization failed: %s", e)
            raise AnalysisError(f"Categorization failed: {e}") from e
        
        if not categorization.category:
            raise AnalysisError("Categorizer returned an empty category")
        logger.debug("Categorized as %r", categorization.category)
        
        # Step 2: urgency
        try:
            urgency = self.scorer.score(message)
        except Exception as e:
            logger.warning("Urgency scoring failed: %s", e)
            raise AnalysisError(f"Urgency scoring failed: {e}") from e
        
        # Step 3: reply template for the resolved category
        try:
            recommended_action = self.templater.recommend(categorization.category)
        except Exception as e:
            logger.warning("Action templating failed: %s", e)
            raise AnalysisError(f"Action templating failed: {e}") from e
        
        return AnalysisResult(
            message=message,
            category=categorization.category,
            urgency=urgency,
            recommended_action=recommended_action,
            reasoning=categorization.reasoning,
            timestamp=utc_timestamp(),
        )
