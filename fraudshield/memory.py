"""Thread-safe in-memory session store with finalization guard.

Each honeypot session carries its accumulated intelligence, message count,
scam flag and a one-shot finalized flag, plus its own lock. The store only
guards the session map; callers serialize work on one session by holding
that session's lock.

Idle sessions are evicted after a TTL, and the store is size-bounded with
least-recently-used eviction. Either policy can be turned off with None.
Finalized session ids are kept in a separate bounded ledger so eviction
never re-opens a finalized session.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from fraudshield.extractor import IntelligenceBundle, empty_bundle

logger = logging.getLogger(__name__)


@dataclass
class HoneypotSession:
    """Per-session state. Mutate only while holding `lock`."""
    session_id: str
    intel: IntelligenceBundle = field(default_factory=empty_bundle)
    message_count: int = 0
    scam_detected: bool = False
    finalized: bool = False
    created_at: float = 0.0
    last_active: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def state(self) -> str:
        return "FINALIZED" if self.finalized else "ACTIVE"

    def mark_scam_detected(self) -> bool:
        """Set the scam flag. Returns True only on the first transition."""
        if self.scam_detected:
            return False
        self.scam_detected = True
        return True

    def try_finalize(self) -> bool:
        """Flip finalized false -> true. Returns True if this call did it."""
        if self.finalized:
            return False
        self.finalized = True
        return True

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "state": self.state,
            "messageCount": self.message_count,
            "scamDetected": self.scam_detected,
            "finalized": self.finalized,
            "intel": {key: list(values) for key, values in self.intel.items()},
        }


class SessionStore:
    """Repository of honeypot sessions keyed by session id.

    Finalized session ids are remembered in a separate ledger that outlives
    session eviction, so a session that is evicted and later resumed comes
    back already finalized. The ledger is size-bounded (oldest ids dropped
    first) and independent of the session TTL.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = 3600,
        max_sessions: Optional[int] = 10000,
        clock: Callable[[], float] = time.monotonic,
        max_finalized: Optional[int] = 100000,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self.max_finalized = max_finalized
        self._clock = clock
        # Ordered least- to most-recently used
        self._sessions: "OrderedDict[str, HoneypotSession]" = OrderedDict()
        # session id -> time of finalization, oldest first
        self._finalized: "OrderedDict[str, float]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> HoneypotSession:
        """Return the session for `session_id`, creating it if unseen."""
        with self._lock:
            now = self._clock()
            self._evict_expired(now)

            session = self._sessions.get(session_id)
            if session is None:
                session = HoneypotSession(
                    session_id=session_id,
                    finalized=session_id in self._finalized,
                    created_at=now,
                    last_active=now,
                )
                self._sessions[session_id] = session
                self._evict_overflow()
                logger.info(f"[{session_id[:8]}] Session created (state={session.state})")
            else:
                session.last_active = now
                self._sessions.move_to_end(session_id)
            return session

    def claim_finalize(self, session_id: str) -> bool:
        """Record `session_id` as finalized. True only for the first claim.

        Callers still hold the session lock; this is the single point that
        decides finalization, so a stale session object left behind by
        eviction cannot finalize a second time.
        """
        with self._lock:
            if session_id in self._finalized:
                return False
            self._finalized[session_id] = self._clock()
            if self.max_finalized:
                while len(self._finalized) > self.max_finalized:
                    sid, _ = self._finalized.popitem(last=False)
                    logger.warning(f"[{sid[:8]}] Finalized id dropped from ledger (limit {self.max_finalized})")
            return True

    def is_finalized(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._finalized

    def get(self, session_id: str) -> Optional[HoneypotSession]:
        with self._lock:
            self._evict_expired(self._clock())
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> None:
        """Drop a session's state. Its finalized record is kept."""
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        """Drop all sessions and the finalized ledger."""
        with self._lock:
            self._sessions.clear()
            self._finalized.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def _evict_expired(self, now: float) -> None:
        """Drop idle sessions from the LRU end. Called under the store lock."""
        if not self.ttl_seconds:
            return
        threshold = now - self.ttl_seconds
        while self._sessions:
            sid, oldest = next(iter(self._sessions.items()))
            if oldest.last_active >= threshold:
                break
            del self._sessions[sid]
            logger.info(f"[{sid[:8]}] Session expired after {self.ttl_seconds}s idle")

    def _evict_overflow(self) -> None:
        if not self.max_sessions:
            return
        while len(self._sessions) > self.max_sessions:
            sid, _ = self._sessions.popitem(last=False)
            logger.info(f"[{sid[:8]}] Session evicted (store full: {self.max_sessions})")

    def stats(self) -> Dict[str, Optional[float]]:
        """Store size and limits, for the health endpoint."""
        with self._lock:
            return {
                "sessions": len(self._sessions),
                "finalizedSessions": len(self._finalized),
                "maxSessions": self.max_sessions,
                "ttlSeconds": self.ttl_seconds,
            }
