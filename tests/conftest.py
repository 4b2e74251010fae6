"""Shared fixtures for the FraudShield test suite."""

import pytest

from fraudshield.detector import MessageScorer
from fraudshield.extractor import IntelligenceExtractor
from fraudshield.honeypot import HoneypotEngine
from fraudshield.memory import SessionStore


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def scorer():
    return MessageScorer()


@pytest.fixture
def extractor():
    return IntelligenceExtractor()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(ttl_seconds=3600, max_sessions=100, clock=clock)


@pytest.fixture
def engine(store):
    return HoneypotEngine(store)
