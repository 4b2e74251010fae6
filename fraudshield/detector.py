"""
Single-message risk scoring engine.

Scores a message through the keyword categories and structural patterns
of the catalog plus a few shape heuristics (length, punctuation, shouting).
The score is clamped to 0-100 and mapped to safe / suspicious / fraud.
Stateless: safe to call concurrently.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fraudshield.catalog import (
    CATEGORIES,
    CATEGORY_ICONS,
    CATEGORY_MESSAGES,
    DEFAULT_ICON,
    DEFAULT_WEIGHTS,
    PATTERN_ICON,
    STRUCTURAL_PATTERNS,
    ScoringWeights,
    matched_keywords,
)


SAFE = "safe"
SUSPICIOUS = "suspicious"
FRAUD = "fraud"

EXPLANATIONS: Dict[str, str] = {
    SAFE: "This message appears to be safe with no significant fraud indicators.",
    SUSPICIOUS: "This message contains some suspicious elements. Exercise caution and verify the sender.",
    FRAUD: "This message shows strong fraud indicators. Do not respond or share any information.",
}
EMPTY_EXPLANATION = "No message provided"

EXCESSIVE_PUNCTUATION = re.compile(r"[!?]{3,}")
CAPS_WORD = re.compile(r"\b[A-Z]{4,}\b", re.ASCII)


@dataclass(frozen=True)
class AnalysisFlag:
    """One unit of evidence contributing to a risk score."""
    category: str
    icon: str
    text: str
    severity: int

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "icon": self.icon,
            "text": self.text,
            "severity": self.severity,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of scoring one message."""
    classification: str
    risk_score: int
    flags: Tuple[AnalysisFlag, ...] = field(default_factory=tuple)
    explanation: str = ""

    @property
    def is_scam(self) -> bool:
        return self.classification in (SUSPICIOUS, FRAUD)

    def to_dict(self) -> dict:
        return {
            "classification": self.classification,
            "riskScore": self.risk_score,
            "flags": [f.to_dict() for f in self.flags],
            "explanation": self.explanation,
        }


def classify(score: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> str:
    """Map a clamped risk score onto a classification label."""
    if score < weights.suspicious_threshold:
        return SAFE
    if score < weights.fraud_threshold:
        return SUSPICIOUS
    return FRAUD


class MessageScorer:
    """Weighted keyword/pattern scorer for a single message."""

    def __init__(self, weights: Optional[ScoringWeights] = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    def score(self, message: Optional[str]) -> AnalysisResult:
        """Score `message` and return its classification, risk score and flags."""
        if not message or not message.strip():
            return AnalysisResult(
                classification=SAFE,
                risk_score=0,
                flags=(),
                explanation=EMPTY_EXPLANATION,
            )

        w = self.weights
        lowered = message.lower()
        flags: List[AnalysisFlag] = []
        risk = 0

        # Keyword categories (case-insensitive)
        for category in CATEGORIES:
            matches = matched_keywords(lowered, category)
            if not matches:
                continue
            severity = w.category_risk(category, len(matches))
            risk += severity
            flags.append(AnalysisFlag(
                category=category,
                icon=CATEGORY_ICONS.get(category, DEFAULT_ICON),
                text=self._category_text(category, matches),
                severity=severity,
            ))

        # Structural patterns (original casing)
        for pattern in STRUCTURAL_PATTERNS:
            if pattern.search(message):
                risk += w.pattern_weight
                flags.append(AnalysisFlag(
                    category="pattern",
                    icon=PATTERN_ICON,
                    text=f"Suspicious pattern detected: {pattern.label}",
                    severity=w.pattern_weight,
                ))

        if len(message) < w.short_message_length:
            risk += w.short_message_weight

        if EXCESSIVE_PUNCTUATION.search(message):
            risk += w.punctuation_weight
            flags.append(AnalysisFlag(
                category="urgency",
                icon="⚡",
                text="Excessive punctuation detected (urgency tactic)",
                severity=w.punctuation_weight,
            ))

        if len(CAPS_WORD.findall(message)) >= w.shouting_min_words:
            risk += w.shouting_weight
            flags.append(AnalysisFlag(
                category="urgency",
                icon="📢",
                text="Excessive capitalization detected (pressure tactic)",
                severity=w.shouting_weight,
            ))

        risk = max(0, min(100, risk))
        classification = classify(risk, w)

        # sorted() is stable: equal severities keep evaluation order
        ordered = tuple(sorted(flags, key=lambda f: f.severity, reverse=True))

        return AnalysisResult(
            classification=classification,
            risk_score=risk,
            flags=ordered,
            explanation=EXPLANATIONS[classification],
        )

    @staticmethod
    def _category_text(category: str, keywords: List[str]) -> str:
        prefix = CATEGORY_MESSAGES.get(category)
        if prefix is None:
            return "Suspicious content detected"
        return f'{prefix}: "{", ".join(keywords[:3])}"'


# Module-level singleton
message_scorer = MessageScorer()
