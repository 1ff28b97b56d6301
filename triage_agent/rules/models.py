"""Rule models - default label sets, quick actions and urgency rules."""

from dataclasses import dataclass, field


# Default UI choice lists. Labels outside these lists are still valid data.
DEFAULT_CATEGORIES = (
    "Technical Support",
    "Billing & Subscription",
    "Product Question",
    "Feature Request",
    "Account Management",
    "Spam/Other",
)

DEFAULT_URGENCIES = ("High", "Medium", "Low")


@dataclass
class QuickAction:
    """A canned sentence the agent can append to the recommended action."""
    label: str
    text: str


DEFAULT_QUICK_ACTIONS = (
    QuickAction(
        label="Request Screenshots",
        text="Could you please provide screenshots of the issue to help us investigate further?",
    ),
    QuickAction(
        label="Escalate to Tier 2",
        text="I am escalating this ticket to our Tier 2 support team for deeper investigation.",
    ),
    QuickAction(
        label="Schedule Call",
        text="Would you be available for a quick 15-minute call to troubleshoot this live?",
    ),
)


@dataclass
class UrgencyRule:
    """A single keyword rule mapping message text to an urgency level."""
    level: str
    keywords: list[str] = field(default_factory=list)
    
    def matches(self, text: str) -> bool:
        """Check if any keyword occurs in the message (case-insensitive)."""
        lowered = text.lower()
        return any(kw.lower() in lowered for kw in self.keywords if kw)
