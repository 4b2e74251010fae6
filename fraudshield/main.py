"""FastAPI entry point. Exposes GET / (health), POST /api/analyze (single
message scoring), POST /api/honeypot (multi-turn engagement) and
POST /api/voice-detection."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fraudshield import __version__, config
from fraudshield.auth import verify_api_key
from fraudshield.callback import send_callback_async
from fraudshield.detector import message_scorer
from fraudshield.honeypot import HoneypotEngine
from fraudshield.memory import SessionStore
from fraudshield.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    HoneypotRequest,
    HoneypotResponse,
    VoiceDetectionRequest,
    VoiceDetectionResponse,
)
from fraudshield.voice import default_voice_classifier

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "FraudShield API"

# Session repository owned by the hosting layer and injected into the engine
session_store = SessionStore(
    ttl_seconds=config.SESSION_TTL_SECONDS,
    max_sessions=config.MAX_SESSIONS,
    max_finalized=config.MAX_FINALIZED_SESSIONS,
)
engine = HoneypotEngine(session_store)
voice_classifier = default_voice_classifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{SERVICE_NAME} v{__version__} started | Docs: /docs | Health: GET /")
    yield
    logger.info(f"{SERVICE_NAME} shutting down ({len(session_store)} sessions in memory)")


app = FastAPI(
    title=SERVICE_NAME,
    description="Message fraud scoring and multi-turn honeypot intelligence extraction",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _bad_request(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"status": "error", "message": message},
    )


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error(f"422 VALIDATION ERROR | {request.url.path} | {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "message": "Invalid request payload."},
    )


@app.get("/")
async def health_check() -> dict:
    return {
        "status": "online",
        "service": SERVICE_NAME,
        "version": __version__,
        **session_store.stats(),
    }


@app.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze_message(
    request: AnalyzeRequest,
    api_key: str = Depends(verify_api_key),
) -> AnalyzeResponse:
    """Score a single message or call transcript."""
    result = message_scorer.score(request.message)
    logger.info(
        f"ANALYZE  msg_len={len(request.message)}  "
        f"score={result.risk_score}  class={result.classification}  flags={len(result.flags)}"
    )
    return AnalyzeResponse(**result.to_dict())


@app.post("/api/honeypot", response_model=HoneypotResponse)
async def process_message(
    request: HoneypotRequest,
    api_key: str = Depends(verify_api_key),
) -> HoneypotResponse:
    """Run one honeypot turn and dispatch the finalize payload if one is produced."""
    session_id = (request.sessionId or "").strip()
    current_text = request.message.text if request.message else ""

    if not session_id or not current_text or not current_text.strip():
        logger.warning("Invalid request: missing sessionId or message text")
        raise _bad_request("Missing required fields (sessionId, message)")

    history = request.conversationHistory or []
    channel = request.metadata.channel if request.metadata else "unknown"
    logger.info(
        f"[{session_id[:8]}] REQUEST  channel={channel}  "
        f"msg_len={len(current_text)}  history_len={len(history)}"
    )

    try:
        result = engine.ingest(session_id, current_text, turns_in_history=len(history))
    except Exception as exc:
        logger.error(
            f"[{session_id[:8]}] Unhandled error in process_message: {exc}",
            exc_info=True,
        )
        return HoneypotResponse(
            status="success",
            reply="Sorry, I didn't catch that. Can you please repeat?",
        )

    # Delivery happens outside the session lock and never affects the reply
    if result.should_finalize and result.payload is not None:
        try:
            send_callback_async(session_id, result.payload)
        except Exception as exc:
            logger.error(f"[{session_id[:8]}] Callback dispatch error: {exc}")

    return HoneypotResponse(status="success", reply=result.reply)


@app.post("/api/voice-detection", response_model=VoiceDetectionResponse)
async def detect_voice(
    request: VoiceDetectionRequest,
    api_key: str = Depends(verify_api_key),
) -> VoiceDetectionResponse:
    """Classify an audio clip as AI-generated or human."""
    if not request.language or not request.audioFormat or not request.audioBase64:
        raise _bad_request("Missing required fields")

    verdict = voice_classifier.classify(
        request.language, request.audioFormat, request.audioBase64
    )
    logger.info(
        f"VOICE  lang={request.language}  format={request.audioFormat}  "
        f"class={verdict.classification}"
    )
    return VoiceDetectionResponse(
        status="success",
        language=request.language,
        classification=verdict.classification,
        confidenceScore=round(verdict.confidence, 2),
        explanation=verdict.explanation,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
