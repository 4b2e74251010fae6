"""Pydantic request/response models for the FraudShield API."""

from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List, Optional, Union


class Message(BaseModel):
    """Single chat message in a conversation."""

    model_config = ConfigDict(extra="ignore")

    sender: Optional[str] = Field(default="scammer")
    text: str = Field(default="")
    timestamp: Optional[Union[str, int]] = Field(default=None)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value):
        """Clients sometimes send epoch ints — normalize to string."""
        if isinstance(value, (int, float)):
            return str(int(value))
        return value


class Metadata(BaseModel):
    """Optional channel/locale context (informational only)."""

    model_config = ConfigDict(extra="ignore")

    channel: str = Field(default="SMS")
    language: str = Field(default="English")
    locale: str = Field(default="IN")


class AnalyzeRequest(BaseModel):
    """Incoming payload on POST /api/analyze."""

    model_config = ConfigDict(extra="ignore")

    message: str = Field(default="")


class Flag(BaseModel):
    category: str
    icon: str
    text: str
    severity: int


class AnalyzeResponse(BaseModel):
    classification: str
    riskScore: int = Field(..., ge=0, le=100)
    flags: List[Flag] = Field(default_factory=list)
    explanation: str


class HoneypotRequest(BaseModel):
    """Incoming payload on POST /api/honeypot."""

    model_config = ConfigDict(extra="ignore")

    sessionId: str = Field(default="")
    message: Optional[Message] = Field(default=None)
    conversationHistory: List[Message] = Field(default_factory=list)
    metadata: Optional[Metadata] = Field(default=None)


class HoneypotResponse(BaseModel):
    """Response returned to the caller — only status + reply, nothing internal."""

    status: str = Field(...)
    reply: str = Field(...)


class VoiceDetectionRequest(BaseModel):
    """Incoming payload on POST /api/voice-detection."""

    model_config = ConfigDict(extra="ignore")

    language: Optional[str] = Field(default=None)
    audioFormat: Optional[str] = Field(default=None)
    audioBase64: Optional[str] = Field(default=None)


class VoiceDetectionResponse(BaseModel):
    status: str = "success"
    language: str
    classification: str
    confidenceScore: float = Field(..., ge=0.0, le=1.0)
    explanation: str


# Callback payload models (used internally)

class ExtractedIntelligence(BaseModel):
    bankAccounts: List[str] = Field(default_factory=list)
    upiIds: List[str] = Field(default_factory=list)
    phishingLinks: List[str] = Field(default_factory=list)
    phoneNumbers: List[str] = Field(default_factory=list)
    suspiciousKeywords: List[str] = Field(default_factory=list)


class FinalOutput(BaseModel):
    """Finalize payload delivered to the configured callback endpoint."""

    sessionId: str
    scamDetected: bool = False
    totalMessagesExchanged: int = Field(default=0, ge=0)
    extractedIntelligence: ExtractedIntelligence = Field(default_factory=ExtractedIntelligence)
    agentNotes: str = ""
