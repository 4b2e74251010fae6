"""Builds the finalize payload and delivers it to the callback endpoint.

Delivery is fire-and-forget: a single POST on a daemon thread, no retry.
Success and failure are only logged; nothing here touches session state."""

import logging
import threading
from typing import Optional

import requests

from fraudshield import config
from fraudshield.models import ExtractedIntelligence, FinalOutput

logger = logging.getLogger(__name__)


def build_final_output(
    session_id: str,
    scam_detected: bool,
    total_messages: int,
    intelligence: dict,
    agent_notes: str,
) -> dict:
    """Build the finalize payload for a session."""
    intel = ExtractedIntelligence(
        bankAccounts=list(intelligence.get("bankAccounts", []) or []),
        upiIds=list(intelligence.get("upiIds", []) or []),
        phishingLinks=list(intelligence.get("phishingLinks", []) or []),
        phoneNumbers=list(intelligence.get("phoneNumbers", []) or []),
        suspiciousKeywords=list(intelligence.get("suspiciousKeywords", []) or []),
    )
    return FinalOutput(
        sessionId=session_id,
        scamDetected=bool(scam_detected),
        totalMessagesExchanged=total_messages,
        extractedIntelligence=intel,
        agentNotes=agent_notes,
    ).model_dump()


def deliver_final_output(session_id: str, payload: dict, url: Optional[str] = None) -> bool:
    """POST the payload once. Returns True on 2xx; never raises."""
    short_id = session_id[:8]
    target = config.CALLBACK_URL if url is None else url

    if not target:
        logger.info(f"[{short_id}] No CALLBACK_URL set, skipping callback")
        return False

    try:
        logger.info(f"[{short_id}] Sending callback to {target}")
        response = requests.post(
            target,
            json=payload,
            timeout=config.CALLBACK_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
        )
    except requests.exceptions.Timeout:
        logger.error(f"[{short_id}] Callback timed out")
        return False
    except requests.exceptions.RequestException as exc:
        logger.error(f"[{short_id}] Callback network error: {exc}")
        return False

    if response.status_code in (200, 201, 202, 204):
        logger.info(f"[{short_id}] Callback accepted ({response.status_code})")
        return True

    logger.warning(
        f"[{short_id}] Callback rejected: "
        f"{response.status_code} {response.text[:200]}"
    )
    return False


def send_callback_async(
    session_id: str,
    payload: dict,
    url: Optional[str] = None,
) -> threading.Thread:
    """Deliver the payload on a background thread without blocking the caller."""
    thread = threading.Thread(
        target=deliver_final_output,
        args=(session_id, payload, url),
        name=f"callback-{session_id[:8]}",
        daemon=True,
    )
    thread.start()
    return thread
