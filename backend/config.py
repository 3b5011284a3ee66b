"""
Configuration settings for the SwasthyaLink backend.
Loads environment variables and provides centralized config access.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Dialogflow (intent detection). Leaving the project id unset runs the
    # chatbot on the local simulator.
    google_cloud_project_id: Optional[str] = None
    dialogflow_location: str = "global"
    dialogflow_language_code: str = "en"

    # Service account file shared by Dialogflow and Gemini
    google_application_credentials: Optional[str] = None

    # Gemini (generative text)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.7
    gemini_max_output_tokens: int = 256
    gemini_top_p: float = 0.8
    gemini_top_k: int = 40

    # Outbound calls
    upstream_timeout_seconds: float = 15.0

    @property
    def dialogflow_configured(self) -> bool:
        return bool(self.google_cloud_project_id)

    def credentials_path(self) -> Optional[Path]:
        """Resolve the service account file, relative paths against the project root."""
        if not self.google_application_credentials:
            return None
        path = Path(self.google_application_credentials)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
