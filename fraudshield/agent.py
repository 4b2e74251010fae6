"""
The honeypot persona: a confused victim that keeps the scammer talking.

Replies are routed by topic. The first bucket whose trigger words appear
in the scammer's message wins; otherwise the persona asks them to repeat.
No state, no learning.
"""

from typing import Tuple


class HoneypotAgent:
    """Topic-routed canned replies for the fake victim."""

    # (topic, trigger substrings, reply) in priority order
    TOPIC_REPLIES: Tuple[Tuple[str, Tuple[str, ...], str], ...] = (
        (
            "banking",
            ("bank", "blocked", "verify"),
            "Oh no! Why is my account being suspended? What should I do?",
        ),
        (
            "payment_id",
            ("upi", "payment", "id"),
            "I'm not sure where to find my UPI ID. Can you tell me how to check it?",
        ),
        (
            "link",
            ("link", "click", "open"),
            "The link is not opening on my phone. Is there another way?",
        ),
        (
            "prize",
            ("winner", "lottery", "prize"),
            "Wow, really? I won? How do I get the money?",
        ),
    )

    FALLBACK_REPLY = "I'm a bit confused, can you explain what I need to do again?"

    AGENT_NOTES = (
        "Scammer identified through pattern analysis. "
        "Intelligence extracted from multi-turn engagement."
    )

    def detect_topic(self, message: str) -> str:
        """Name of the first matching topic bucket, or 'fallback'."""
        text = (message or "").lower()
        for topic, triggers, _ in self.TOPIC_REPLIES:
            if any(t in text for t in triggers):
                return topic
        return "fallback"

    def get_reply(self, message: str) -> str:
        topic = self.detect_topic(message)
        for name, _, reply in self.TOPIC_REPLIES:
            if name == topic:
                return reply
        return self.FALLBACK_REPLY


# Module-level singleton
honeypot_agent = HoneypotAgent()
