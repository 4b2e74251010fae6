"""Runtime configuration loaded from the environment (and a .env file, if present)."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer env var. Empty or "0" disables the setting (returns None)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw or raw == "0":
        return None
    return int(raw)


API_KEY: str = os.getenv("API_KEY", "sk_test_123456789")

CALLBACK_URL: str = os.getenv(
    "CALLBACK_URL",
    "https://hackathon.guvi.in/api/updateHoneyPotFinalResult",
)
CALLBACK_TIMEOUT_SECONDS: float = float(os.getenv("CALLBACK_TIMEOUT_SECONDS", "15"))

# Idle sessions older than this are evicted from the session store
SESSION_TTL_SECONDS: Optional[int] = _int_env("SESSION_TTL_SECONDS", 3600)
MAX_SESSIONS: Optional[int] = _int_env("MAX_SESSIONS", 10000)
MAX_FINALIZED_SESSIONS: Optional[int] = _int_env("MAX_FINALIZED_SESSIONS", 100000)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
