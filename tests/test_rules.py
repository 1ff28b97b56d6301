"""
Unit tests for the deterministic urgency scorer and action templates.
"""
import pytest

from triage_agent.rules import ActionTemplater, UrgencyRule, UrgencyScorer
from triage_agent.rules.models import DEFAULT_CATEGORIES


class TestUrgencyRule:
    """Tests for keyword matching."""
    
    def test_case_insensitive(self):
        """Test that keywords match regardless of case."""
        rule = UrgencyRule(level="High", keywords=["urgent"])
        
        assert rule.matches("This is URGENT") is True
    
    def test_no_match(self):
        """Test text without any keyword."""
        rule = UrgencyRule(level="High", keywords=["urgent", "asap"])
        
        assert rule.matches("Just a question") is False
    
    def test_empty_keywords_never_match(self):
        """Test that blank keywords are ignored."""
        rule = UrgencyRule(level="High", keywords=[""])
        
        assert rule.matches("anything") is False


class TestUrgencyScorer:
    """Tests for the default urgency rules."""
    
    @pytest.fixture
    def scorer(self):
        return UrgencyScorer()
    
    @pytest.mark.parametrize("message,expected", [
        ("Our production site is down, please help ASAP", "High"),
        ("I am locked out of my account", "High"),
        ("I was charged twice this month", "High"),
        ("My invoice is wrong", "Medium"),
        ("The export button is not working", "Medium"),
        ("Do you have a dark mode?", "Low"),
        ("", "Low"),
    ])
    def test_default_levels(self, scorer, message, expected):
        """Test representative messages against the default rules."""
        assert scorer.score(message) == expected
    
    def test_first_rule_wins(self):
        """Test that rule order decides between overlapping matches."""
        scorer = UrgencyScorer(rules=[
            UrgencyRule(level="Medium", keywords=["invoice"]),
            UrgencyRule(level="High", keywords=["urgent"]),
        ])
        
        assert scorer.score("Urgent: invoice problem") == "Medium"
    
    def test_custom_default(self):
        """Test a configured fallback level."""
        scorer = UrgencyScorer(rules=[], default_level="Medium")
        
        assert scorer.score("hello") == "Medium"


class TestActionTemplater:
    """Tests for category templates."""
    
    @pytest.fixture
    def templater(self):
        return ActionTemplater()
    
    def test_every_default_category_has_template(self, templater):
        """Test that no default category falls back to the generic text."""
        for category in DEFAULT_CATEGORIES:
            assert templater.recommend(category) != templater.default_template
    
    def test_unknown_category_gets_default(self, templater):
        """Test sensible text for novel labels."""
        assert templater.recommend("Legal Inquiry") == templater.default_template
        assert templater.default_template
    
    def test_custom_templates(self):
        """Test templates supplied from configuration."""
        templater = ActionTemplater({"Billing & Subscription": "Custom"}, default_template="Fallback")
        
        assert templater.recommend("Billing & Subscription") == "Custom"
        assert templater.recommend("Technical Support") == "Fallback"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
