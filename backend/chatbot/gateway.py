"""
Chat Gateway - validates chat input and routes it to the right upstream.

- chat(): intent detection (Dialogflow, or the simulator when unconfigured)
- generate(): free-form generation (Gemini)

Upstream errors propagate as UpstreamFailure / UpstreamTimeout.
"""

from typing import Optional

from backend.chatbot.gemini import GeminiClient
from backend.chatbot.intent import IntentDetector, IntentResult
from backend.errors import InvalidInput

DEFAULT_SESSION_ID = "default-session"


class ChatGateway:
    def __init__(self, intent_detector: IntentDetector, gemini: GeminiClient):
        self.intent_detector = intent_detector
        self.gemini = gemini

    @property
    def dialogflow_status(self) -> str:
        return self.intent_detector.mode

    @property
    def gemini_status(self) -> str:
        return "configured" if self.gemini.configured else "unconfigured"

    def chat(self, message: Optional[str], session_id: Optional[str] = None) -> IntentResult:
        if not message:
            raise InvalidInput("Message is required")
        return self.intent_detector.detect(message, session_id or DEFAULT_SESSION_ID)

    def generate(self, message: Optional[str]) -> str:
        if not message:
            raise InvalidInput("Message is required")
        return self.gemini.generate(message)
