"""
Multi-turn honeypot engine.

Each ingest call scores the scammer's message, merges the extracted
intelligence into the session, picks a persona reply and decides whether
the session has enough evidence to finalize. All of that happens under
the session's own lock, so concurrent turns for one session are
serialized while different sessions proceed independently.

A session finalizes at most once. The payload is returned to the caller,
who delivers it after the lock has been released.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fraudshield.agent import HoneypotAgent, honeypot_agent
from fraudshield.callback import build_final_output
from fraudshield.detector import MessageScorer, message_scorer
from fraudshield.extractor import (
    IntelligenceExtractor,
    intelligence_extractor,
    merge_intelligence,
)
from fraudshield.memory import SessionStore

logger = logging.getLogger(__name__)

# Minimum exchanged messages before a confirmed scam may be finalized
MIN_MESSAGES_TO_FINALIZE: int = 2


@dataclass(frozen=True)
class IngestResult:
    reply: str
    should_finalize: bool = False
    payload: Optional[dict] = None


class HoneypotEngine:
    """Drives honeypot sessions held in an injected SessionStore."""

    def __init__(
        self,
        store: SessionStore,
        scorer: Optional[MessageScorer] = None,
        extractor: Optional[IntelligenceExtractor] = None,
        agent: Optional[HoneypotAgent] = None,
        min_messages: int = MIN_MESSAGES_TO_FINALIZE,
    ) -> None:
        self.store = store
        self.scorer = scorer or message_scorer
        self.extractor = extractor or intelligence_extractor
        self.agent = agent or honeypot_agent
        self.min_messages = min_messages

    def ingest(
        self,
        session_id: str,
        message_text: str,
        turns_in_history: int = 0,
    ) -> IngestResult:
        """Process one scammer turn. `session_id` and `message_text` must be non-empty."""
        short_id = session_id[:8]
        session = self.store.get_or_create(session_id)

        with session.lock:
            session.message_count += 1 + max(turns_in_history, 0)

            analysis = self.scorer.score(message_text)
            if analysis.is_scam and session.mark_scam_detected():
                logger.info(
                    f"[{short_id}] SCAM CONFIRMED score={analysis.risk_score} "
                    f"class={analysis.classification}"
                )

            merge_intelligence(session.intel, self.extractor.extract(message_text))

            reply = self.agent.get_reply(message_text)

            payload = None
            should_finalize = False
            if (
                session.scam_detected
                and session.message_count >= self.min_messages
                and not session.finalized
            ):
                # The store's ledger decides; a stale evicted copy loses the claim
                should_finalize = self.store.claim_finalize(session_id)
                session.try_finalize()
            if should_finalize:
                payload = build_final_output(
                    session_id=session_id,
                    scam_detected=session.scam_detected,
                    total_messages=session.message_count,
                    intelligence=session.intel,
                    agent_notes=self.agent.AGENT_NOTES,
                )
                logger.info(f"[{short_id}] FINALIZED msgs={session.message_count}")

            logger.debug(
                f"[{short_id}] turn score={analysis.risk_score} "
                f"scam={session.scam_detected} msgs={session.message_count} "
                f"state={session.state}"
            )

        return IngestResult(reply=reply, should_finalize=should_finalize, payload=payload)

    def snapshot(self, session_id: str) -> Optional[dict]:
        """Read-only copy of a session's state, or None if unknown."""
        session = self.store.get(session_id)
        if session is None:
            return None
        with session.lock:
            return session.to_dict()
