"""
Gemini client - single-turn text generation via ``generateContent``.

Authenticates with an API key when one is configured, otherwise with
Google credentials (service account file or application default) through
an ``AuthorizedSession``.
"""

import logging
import threading
from typing import Any, Optional

import google.auth
import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession

from backend.chatbot.credentials import (
    CLOUD_PLATFORM_SCOPE,
    GENERATIVE_LANGUAGE_SCOPE,
    load_service_account_credentials,
)
from backend.config import Settings
from backend.errors import UpstreamFailure, UpstreamTimeout

logger = logging.getLogger(__name__)

GEMINI_SCOPES = (CLOUD_PLATFORM_SCOPE, GENERATIVE_LANGUAGE_SCOPE)
NO_TEXT_RESPONSE = "Sorry, I could not generate a response."


def build_generation_payload(message: str, settings: Settings) -> dict[str, Any]:
    """Request body for a single user prompt with fixed generation parameters."""
    return {
        "contents": [{"parts": [{"text": message}]}],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_output_tokens,
            "topP": settings.gemini_top_p,
            "topK": settings.gemini_top_k,
        },
    }


def extract_generated_text(data: Any) -> str:
    """Text of the first part of the first candidate, if any."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_TEXT_RESPONSE
    return text or NO_TEXT_RESPONSE


class GeminiClient:
    """Thin wrapper around the Generative Language REST API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._session = session
        self._session_lock = threading.Lock()

    @property
    def url(self) -> str:
        base = self.settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.settings.gemini_model}:generateContent"

    @property
    def configured(self) -> bool:
        return bool(
            self.settings.gemini_api_key
            or self.settings.google_application_credentials
        )

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            with self._session_lock:
                if self._session is None:
                    self._session = self._create_session()
        return self._session

    def _create_session(self) -> requests.Session:
        if self.settings.gemini_api_key:
            return requests.Session()

        try:
            credentials = load_service_account_credentials(self.settings, GEMINI_SCOPES)
            if credentials is None:
                credentials, _ = google.auth.default(scopes=list(GEMINI_SCOPES))
        except (GoogleAuthError, OSError, ValueError) as e:
            logger.error("Gemini credentials unavailable: %s", e)
            raise UpstreamFailure("Gemini credentials are not configured", original_error=e)
        return AuthorizedSession(credentials)

    def generate(self, message: str) -> str:
        """Generate a reply to ``message``."""
        params = {"key": self.settings.gemini_api_key} if self.settings.gemini_api_key else None

        try:
            response = self.session.post(
                self.url,
                json=build_generation_payload(message, self.settings),
                params=params,
                timeout=self.settings.upstream_timeout_seconds,
            )
        except requests.Timeout as e:
            logger.warning("Gemini API request timed out: %s", e)
            raise UpstreamTimeout("Gemini API request timed out", original_error=e)
        except (requests.RequestException, GoogleAuthError) as e:
            logger.exception("Gemini API proxy error")
            raise UpstreamFailure(str(e) or "Gemini API error", original_error=e)

        if response.status_code != 200:
            logger.warning(
                "Gemini API returned %s: %s", response.status_code, response.text[:500]
            )
            raise UpstreamFailure("Gemini API error")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailure("Gemini API returned an invalid response", original_error=e)

        return extract_generated_text(data)
