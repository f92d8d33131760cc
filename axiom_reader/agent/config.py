"""Session configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed session manager.
The model identity and its tuning parameters live here, not in the
session contract.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _env_api_key() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


class SessionConfig(BaseModel):
    """Configuration for the document session manager.

    The API key may be empty: a missing credential is reported as
    AuthenticationRequired when a session is initialized, so the UI can
    prompt for a key instead of failing at startup.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_output_tokens: Maximum tokens in a generated response.
        num_history_runs: Past exchanges replayed as conversation context.
    """

    api_key: str = Field(
        default_factory=_env_api_key,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_output_tokens: int = Field(
        default_factory=lambda: int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "8192")),
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )
    num_history_runs: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Number of previous exchanges kept in context",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_session_config() -> SessionConfig:
    """Create session configuration from environment.

    Returns:
        Configured SessionConfig instance.
    """
    return SessionConfig()
