"""Regex-based intelligence extraction.

Pulls bank accounts, UPI/payment IDs, phishing links, phone numbers and
matched catalog keywords out of a single message. Every result list is
de-duplicated in first-seen order. Stateless; per-session accumulation
is the session store's job (see merge_intelligence)."""

import re
from typing import Dict, Iterable, List, Optional

from fraudshield.catalog import TRUSTED_LINK_DOMAINS, all_keywords


INTEL_KEYS = (
    "bankAccounts",
    "upiIds",
    "phishingLinks",
    "phoneNumbers",
    "suspiciousKeywords",
)

IntelligenceBundle = Dict[str, List[str]]


def empty_bundle() -> IntelligenceBundle:
    return {key: [] for key in INTEL_KEYS}


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def merge_intelligence(target: IntelligenceBundle, new: IntelligenceBundle) -> IntelligenceBundle:
    """Union `new` into `target` in place, keeping existing order first."""
    for key in INTEL_KEYS:
        target[key] = _unique(list(target.get(key, [])) + list(new.get(key, [])))
    return target


class IntelligenceExtractor:
    """Extracts attacker-supplied artifacts from one message."""

    BANK_ACCOUNT_PATTERN = re.compile(r"\b\d{10,16}\b", re.ASCII)

    # Deliberately looser than a real VPA/email grammar
    UPI_PATTERN = re.compile(r"[a-zA-Z0-9.\-_]{2,256}@[a-zA-Z]{2,64}")

    URL_PATTERN = re.compile(r"https?://[^\s]+")

    # Indian mobile: optional +91 / 0 prefix, 6-9 lead digit, 9 more digits
    PHONE_PATTERN = re.compile(r"(?<![\d+])(?:\+91|0)?[6-9]\d{9}(?!\d)", re.ASCII)

    def __init__(self, trusted_domains: Optional[Iterable[str]] = None) -> None:
        self.trusted_domains = tuple(trusted_domains or TRUSTED_LINK_DOMAINS)
        self._keywords = all_keywords()

    def extract(self, text: Optional[str]) -> IntelligenceBundle:
        """Return the de-duplicated intelligence bundle for `text`."""
        if not text or not text.strip():
            return empty_bundle()

        return {
            "bankAccounts": self._extract_bank_accounts(text),
            "upiIds": self._extract_upi_ids(text),
            "phishingLinks": self._extract_links(text),
            "phoneNumbers": self._extract_phones(text),
            "suspiciousKeywords": self._extract_keywords(text),
        }

    def _extract_bank_accounts(self, text: str) -> List[str]:
        return _unique(self.BANK_ACCOUNT_PATTERN.findall(text))

    def _extract_upi_ids(self, text: str) -> List[str]:
        return _unique(self.UPI_PATTERN.findall(text))

    def _extract_links(self, text: str) -> List[str]:
        return _unique(
            link for link in self.URL_PATTERN.findall(text)
            if not any(domain in link for domain in self.trusted_domains)
        )

    def _extract_phones(self, text: str) -> List[str]:
        return _unique(m.group(0) for m in self.PHONE_PATTERN.finditer(text))

    def _extract_keywords(self, text: str) -> List[str]:
        lowered = text.lower()
        return [kw for kw in self._keywords if kw in lowered]


# Module-level singleton
intelligence_extractor = IntelligenceExtractor()
