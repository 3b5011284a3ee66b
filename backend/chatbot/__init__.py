"""
Health Assistant Chatbot

Components:
- fallback: keyword responder used when Dialogflow is not configured
- intent: Dialogflow and simulated intent detectors
- gemini: Gemini text generation client
- gateway: input validation and upstream routing
- api: FastAPI endpoints
"""

from .fallback import FallbackResponder, HEALTH_TIPS, KEYWORD_RULES
from .gateway import ChatGateway
from .gemini import GeminiClient
from .intent import (
    DialogflowIntentDetector,
    IntentDetector,
    IntentResult,
    SimulatedIntentDetector,
    build_intent_detector,
)

__all__ = [
    "ChatGateway",
    "DialogflowIntentDetector",
    "FallbackResponder",
    "GeminiClient",
    "HEALTH_TIPS",
    "IntentDetector",
    "IntentResult",
    "KEYWORD_RULES",
    "SimulatedIntentDetector",
    "build_intent_detector",
]
