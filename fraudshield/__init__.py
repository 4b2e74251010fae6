"""
FraudShield — Source Package
============================

Message fraud scoring and a multi-turn scam honeypot:
    - main.py      : FastAPI application entry point and request pipeline
    - agent.py     : Topic-routed victim persona replies
    - auth.py      : API key authentication dependency
    - callback.py  : Finalize payload builder and fire-and-forget sender
    - catalog.py   : Keyword categories, structural patterns, scoring weights
    - config.py    : Environment-driven settings
    - detector.py  : Single-message risk scoring engine
    - extractor.py : Regex-based intelligence extraction
    - honeypot.py  : Per-turn honeypot state machine
    - memory.py    : Thread-safe session store with TTL/LRU eviction
    - models.py    : Pydantic request/response schemas
    - voice.py     : Pluggable voice origin classifier
"""

__version__ = "1.0.0"
