"""
Intent detection upstreams.

The chatbot talks to exactly one of two detectors, chosen at startup:
- DialogflowIntentDetector: a Dialogflow ES agent, session-scoped by
  (project, location, session id)
- SimulatedIntentDetector: the local keyword responder, used when no
  Dialogflow project is configured or the client cannot be created

A configured detector that fails reports the failure; it never falls back
to the simulator.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.api_core.client_options import ClientOptions
from google.auth.exceptions import GoogleAuthError
from google.cloud import dialogflow

from backend.chatbot.credentials import load_service_account_credentials
from backend.chatbot.fallback import (
    DEFAULT_INTENT,
    SIMULATED_SESSION_ID,
    FallbackResponder,
)
from backend.config import Settings
from backend.errors import UpstreamFailure, UpstreamTimeout

logger = logging.getLogger(__name__)

DIALOGFLOW_ERROR = "Failed to get response from Dialogflow"


@dataclass
class IntentResult:
    """Uniform reply from either detector."""
    response: str
    intent: str
    session_id: str


class IntentDetector(ABC):
    """Capability handed to the chat gateway."""

    #: Reported by the health endpoint
    mode: str

    @abstractmethod
    def detect(self, message: str, session_id: str) -> IntentResult:
        ...


class SimulatedIntentDetector(IntentDetector):
    mode = "simulated"

    def __init__(self, responder: Optional[FallbackResponder] = None):
        self.responder = responder or FallbackResponder()

    def detect(self, message: str, session_id: str) -> IntentResult:
        reply = self.responder.respond(message)
        return IntentResult(
            response=reply.response,
            intent=reply.intent,
            session_id=SIMULATED_SESSION_ID,
        )


class DialogflowIntentDetector(IntentDetector):
    mode = "connected"

    def __init__(
        self,
        client: dialogflow.SessionsClient,
        project_id: str,
        location: str = "global",
        language_code: str = "en",
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.project_id = project_id
        self.location = location
        self.language_code = language_code
        self.timeout = timeout

    def session_path(self, session_id: str) -> str:
        return (
            f"projects/{self.project_id}/locations/{self.location}"
            f"/agent/sessions/{session_id}"
        )

    def detect(self, message: str, session_id: str) -> IntentResult:
        text_input = dialogflow.TextInput(text=message, language_code=self.language_code)
        query_input = dialogflow.QueryInput(text=text_input)

        try:
            response = self.client.detect_intent(
                request={
                    "session": self.session_path(session_id),
                    "query_input": query_input,
                },
                timeout=self.timeout,
            )
        except google_exceptions.DeadlineExceeded as e:
            logger.warning("Dialogflow detect intent timed out: %s", e)
            raise UpstreamTimeout("Dialogflow request timed out", original_error=e)
        except (google_exceptions.GoogleAPIError, GoogleAuthError) as e:
            logger.exception("Dialogflow detect intent error")
            message_text = getattr(e, "message", None) or str(e) or DIALOGFLOW_ERROR
            raise UpstreamFailure(message_text, original_error=e)

        result = response.query_result
        return IntentResult(
            response=result.fulfillment_text,
            intent=result.intent.display_name or DEFAULT_INTENT,
            session_id=session_id,
        )


def _create_sessions_client(settings: Settings) -> dialogflow.SessionsClient:
    client_options = None
    if settings.dialogflow_location != "global":
        client_options = ClientOptions(
            api_endpoint=f"{settings.dialogflow_location}-dialogflow.googleapis.com"
        )
    return dialogflow.SessionsClient(
        credentials=load_service_account_credentials(settings),
        client_options=client_options,
    )


def build_intent_detector(settings: Settings) -> IntentDetector:
    """Pick the detector for this process."""
    if not settings.dialogflow_configured:
        logger.info("No Dialogflow project configured; using simulated responses")
        return SimulatedIntentDetector()

    try:
        client = _create_sessions_client(settings)
    except (GoogleAuthError, OSError, ValueError) as e:
        logger.error("Failed to initialize Dialogflow client: %s", e)
        logger.info("Using simulated responses instead")
        return SimulatedIntentDetector()

    logger.info("Dialogflow client initialized for project %s", settings.google_cloud_project_id)
    return DialogflowIntentDetector(
        client=client,
        project_id=settings.google_cloud_project_id,
        location=settings.dialogflow_location,
        language_code=settings.dialogflow_language_code,
        timeout=settings.upstream_timeout_seconds,
    )
