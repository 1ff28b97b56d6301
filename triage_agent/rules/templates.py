"""Template-based recommended actions."""

from typing import Mapping, Optional


DEFAULT_TEMPLATES = {
    "Technical Support": (
        "Thank you for reporting this issue. Our technical team is looking into it. "
        "In the meantime, please try clearing your browser cache and restarting the "
        "application, and let us know the exact error message if the problem persists."
    ),
    "Billing & Subscription": (
        "Thank you for reaching out about your billing. I have reviewed your account "
        "and will verify the charges on your latest invoice. You will receive a "
        "detailed breakdown and any applicable correction within 2 business days."
    ),
    "Product Question": (
        "Great question! You can find step-by-step instructions in our Help Center. "
        "If anything is still unclear, reply to this message and we will walk you "
        "through it."
    ),
    "Feature Request": (
        "Thank you for the suggestion! I have shared your feature request with our "
        "product team. We review all requests when planning our roadmap and will "
        "keep you posted on any updates."
    ),
    "Account Management": (
        "I can help with your account. For your security, please confirm the email "
        "address associated with the account and we will process your request right away."
    ),
    "Spam/Other": (
        "No response required. Mark as spam or archive the message."
    ),
}

DEFAULT_TEMPLATE = (
    "Thank you for contacting us. A member of our support team will review your "
    "message and get back to you shortly."
)


class ActionTemplater:
    """Maps a category label to boilerplate reply text."""
    
    def __init__(self, templates: Optional[Mapping[str, str]] = None, default_template: str = DEFAULT_TEMPLATE):
        self.templates = dict(DEFAULT_TEMPLATES if templates is None else templates)
        self.default_template = default_template
    
    def recommend(self, category: str) -> str:
        """Return the template for a category, or the default text for unknown labels."""
        return self.templates.get(category, self.default_template)
