"""
Static pattern catalog shared by the scorer and the intelligence extractor.

Holds the weighted keyword categories, the structural regex patterns
(each paired with its own label) and the tunable scoring weights.
Everything here is immutable for the lifetime of the process.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Tuple


# Keyword categories, evaluated in this order. Keywords are lowercase and
# matched as plain substrings of the lowered message.
CATEGORIES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "urgency": (
        "urgent", "immediately", "now", "asap", "hurry", "quick", "fast",
        "expire", "limited time",
    ),
    "money": (
        "winner", "won", "prize", "lottery", "million", "thousand", "cash",
        "reward", "claim", "free money",
    ),
    "banking": (
        "bank account", "credit card", "debit card", "cvv", "pin", "otp",
        "password", "verify account", "suspended", "blocked",
    ),
    "threats": (
        "suspend", "block", "terminate", "legal action", "arrest", "police",
        "court", "fine",
    ),
    "requests": (
        "click here", "click link", "download", "install", "update", "verify",
        "confirm", "send money", "transfer",
    ),
    "impersonation": (
        "bank", "government", "tax department", "irs", "police", "courier",
        "delivery", "amazon", "paypal",
    ),
})

CATEGORY_ICONS: Mapping[str, str] = MappingProxyType({
    "urgency": "⚡",
    "money": "💰",
    "banking": "🏦",
    "threats": "⚠️",
    "requests": "🔗",
    "impersonation": "🎭",
})
DEFAULT_ICON = "🚩"
PATTERN_ICON = "🔍"

CATEGORY_MESSAGES: Mapping[str, str] = MappingProxyType({
    "urgency": "Urgency tactics detected",
    "money": "Money-related fraud keywords",
    "banking": "Banking/financial information requested",
    "threats": "Threatening language detected",
    "requests": "Suspicious action requests",
    "impersonation": "Possible impersonation attempt",
})

# Brands whose links are never flagged by the suspicious-URL pattern
TRUSTED_URL_BRANDS: Tuple[str, ...] = ("google", "facebook", "amazon", "apple", "microsoft")

# Domains whose links are never reported as phishing links
TRUSTED_LINK_DOMAINS: Tuple[str, ...] = ("google.com", "amazon.com")


@dataclass(frozen=True)
class StructuralPattern:
    """A compiled regex paired with the label reported when it matches."""
    kind: str
    regex: re.Pattern
    label: str

    def search(self, text: str) -> bool:
        return self.regex.search(text) is not None


STRUCTURAL_PATTERNS: Tuple[StructuralPattern, ...] = (
    StructuralPattern("credit_card", re.compile(r"\b\d{16}\b", re.ASCII), "Credit card number"),
    StructuralPattern("ssn", re.compile(r"\b\d{3}-\d{2}-\d{4}\b", re.ASCII), "Social security number"),
    StructuralPattern(
        "url",
        # Lookahead is scoped to the URL token itself
        re.compile(
            r"https?://(?![^\s]*(?:%s))[^\s]+" % "|".join(TRUSTED_URL_BRANDS),
            re.IGNORECASE,
        ),
        "Suspicious URL",
    ),
    StructuralPattern("usd_amount", re.compile(r"\$\d+[,\d]*(?:\.\d{2})?", re.ASCII), "Money amount"),
    StructuralPattern("inr_amount", re.compile(r"₹\d+[,\d]*(?:\.\d{2})?", re.ASCII), "Money amount"),
)


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable constants used by the message scorer."""
    category_weights: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({
        "urgency": 15,
        "money": 25,
        "banking": 30,
        "threats": 25,
        "requests": 20,
        "impersonation": 20,
    }))
    default_category_weight: int = 10
    match_cap: int = 3
    pattern_weight: int = 15
    short_message_length: int = 20
    short_message_weight: int = 5
    punctuation_weight: int = 10
    shouting_weight: int = 10
    shouting_min_words: int = 3
    suspicious_threshold: int = 30
    fraud_threshold: int = 70

    def category_risk(self, category: str, match_count: int) -> int:
        base = self.category_weights.get(category, self.default_category_weight)
        return base * min(match_count, self.match_cap)


DEFAULT_WEIGHTS = ScoringWeights()


def matched_keywords(lowered: str, category: str) -> List[str]:
    """Keywords of `category` that occur in an already-lowered message."""
    return [kw for kw in CATEGORIES.get(category, ()) if kw in lowered]


def all_keywords() -> List[str]:
    """Every catalog keyword, de-duplicated, in category order."""
    return list(dict.fromkeys(kw for kws in CATEGORIES.values() for kw in kws))
