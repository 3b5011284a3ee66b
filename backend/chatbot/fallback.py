"""
Fallback Responder - keyword-matched canned replies.

Used in place of Dialogflow when no project is configured. The first
matching rule wins; messages matching no rule get a random health tip.
"""

import random
from dataclasses import dataclass
from typing import Optional

SIMULATED_SESSION_ID = "simulated-session-id"
DEFAULT_INTENT = "default"


@dataclass(frozen=True)
class KeywordRule:
    """Canned reply for messages containing any of ``keywords``."""
    keywords: tuple[str, ...]
    intent: str
    response: str

    def matches(self, lowered_message: str) -> bool:
        return any(k in lowered_message for k in self.keywords)


@dataclass(frozen=True)
class CannedReply:
    response: str
    intent: str


# =============================================================================
# RULES
# =============================================================================

KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        keywords=("hello", "hi"),
        intent="greeting",
        response="Hello! I'm your health assistant powered by Dialogflow. How can I help you today?",
    ),
    KeywordRule(
        keywords=("help",),
        intent="help",
        response=(
            "I can help you with health information, finding doctors, booking "
            "appointments, and answering medical questions. What would you like to know?"
        ),
    ),
    KeywordRule(
        keywords=("doctor",),
        intent="doctor_info",
        response=(
            "You can find a list of doctors in the Doctors section of your dashboard "
            "or book an appointment directly from there."
        ),
    ),
    KeywordRule(
        keywords=("appointment",),
        intent="appointment_info",
        response=(
            "To book an appointment, go to your dashboard and click 'Book Appointment'. "
            "You can select a doctor, date, and time that works for you."
        ),
    ),
    KeywordRule(
        keywords=("medicine", "prescription"),
        intent="medicine_info",
        response=(
            "Always follow your doctor's prescription. If you have questions about "
            "your medication, consult your healthcare provider."
        ),
    ),
    KeywordRule(
        keywords=("emergency",),
        intent="emergency_info",
        response=(
            "If this is a medical emergency, please call your local emergency number "
            "immediately or go to the nearest emergency room."
        ),
    ),
    KeywordRule(
        keywords=("bye", "goodbye"),
        intent="goodbye",
        response=(
            "Goodbye! Take care of your health. Feel free to come back if you have "
            "more questions."
        ),
    ),
)

HEALTH_TIPS: tuple[str, ...] = (
    "Remember to stay hydrated throughout the day!",
    "Regular exercise is important for maintaining good health.",
    "A balanced diet with plenty of fruits and vegetables is essential.",
    "Getting adequate sleep helps your body recover and function properly.",
    "Regular health checkups can help detect issues early.",
    "Managing stress is important for both mental and physical health.",
    "Washing your hands frequently helps prevent the spread of germs.",
)


class FallbackResponder:
    """Rule-based stand-in for the intent detection service."""

    def __init__(
        self,
        rules: tuple[KeywordRule, ...] = KEYWORD_RULES,
        tips: tuple[str, ...] = HEALTH_TIPS,
        rng: Optional[random.Random] = None,
    ):
        self.rules = rules
        self.tips = tips
        self._rng = rng or random.Random()

    def respond(self, message: str) -> CannedReply:
        lowered = message.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return CannedReply(response=rule.response, intent=rule.intent)
        return CannedReply(response=self._rng.choice(self.tips), intent=DEFAULT_INTENT)
