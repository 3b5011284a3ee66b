"""
Google credential loading shared by the Dialogflow and Gemini clients.

A configured service account file wins; otherwise the Google libraries fall
back to application-default credentials.
"""

from typing import Optional, Sequence

from google.oauth2 import service_account

from backend.config import Settings

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
GENERATIVE_LANGUAGE_SCOPE = "https://www.googleapis.com/auth/generative-language"


def load_service_account_credentials(
    settings: Settings,
    scopes: Sequence[str] = (CLOUD_PLATFORM_SCOPE,),
) -> Optional[service_account.Credentials]:
    """Load the configured service account file, or None when none is set."""
    path = settings.credentials_path()
    if path is None:
        return None
    return service_account.Credentials.from_service_account_file(
        str(path), scopes=list(scopes)
    )
