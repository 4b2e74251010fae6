"""Voice origin classification (AI-generated vs human).

The classifier is pluggable. The default implementation is a deterministic
placeholder so results are reproducible; a real model can be dropped in by
implementing VoiceClassifier.classify.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

AI_GENERATED = "AI_GENERATED"
HUMAN = "HUMAN"


@dataclass(frozen=True)
class VoiceVerdict:
    classification: str
    confidence: float
    explanation: str


class VoiceClassifier(ABC):
    @abstractmethod
    def classify(self, language: str, audio_format: str, audio_base64: str) -> VoiceVerdict:
        ...


class ParityVoiceClassifier(VoiceClassifier):
    """Placeholder: even-length payloads are AI_GENERATED, odd are HUMAN."""

    def __init__(self, confidence: float = 0.9) -> None:
        self.confidence = confidence

    def classify(self, language: str, audio_format: str, audio_base64: str) -> VoiceVerdict:
        if len(audio_base64) % 2 == 0:
            return VoiceVerdict(
                classification=AI_GENERATED,
                confidence=self.confidence,
                explanation="Unnatural pitch consistency and robotic speech patterns detected",
            )
        return VoiceVerdict(
            classification=HUMAN,
            confidence=self.confidence,
            explanation="Natural human vocal jitter and breathing patterns identified",
        )


default_voice_classifier = ParityVoiceClassifier()
