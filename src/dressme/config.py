"""Runtime configuration.

Settings come from environment variables (optionally from a ``.env`` file
loaded by the CLI). Centralizes defaults so no other module reads the
environment directly.
"""

import os

from pydantic import BaseModel, Field


class LogLevel:
    """Level names accepted by --log-level and DRESSME_LOG_LEVEL.

    Values match the stdlib logging levels so they can be passed to
    Logger.setLevel directly.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns WARNING if invalid."""
        return cls._from_string.get(level_str.strip().lower(), cls.WARNING)


class Settings(BaseModel):
    """Effective application settings."""

    api_key: str | None = Field(default=None, description="OpenAI API key; None disables remote features")
    base_url: str = Field(default="https://api.openai.com/v1")
    vision_model: str = Field(default="gpt-4o-mini")
    chat_model: str = Field(default="gpt-4o-mini")
    speech_model: str = Field(default="gpt-4o-mini-tts")
    voice: str = Field(default="alloy")
    audio_format: str = Field(default="mp3")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    request_timeout: float = Field(default=30.0, gt=0)
    resource_timeout: float = Field(default=60.0, gt=0)
    camera_index: int = Field(default=0, ge=0)
    log_level: str = Field(default="warning")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def masked_api_key(self) -> str:
        """API key safe for display."""
        if not self.api_key:
            return "(not set)"
        if len(self.api_key) <= 8:
            return "****"
        return f"{self.api_key[:3]}...{self.api_key[-4:]}"


# Environment variable -> Settings field
ENV_VARS = {
    "OPENAI_API_KEY": "api_key",
    "OPENAI_BASE_URL": "base_url",
    "DRESSME_VISION_MODEL": "vision_model",
    "DRESSME_CHAT_MODEL": "chat_model",
    "DRESSME_TTS_MODEL": "speech_model",
    "DRESSME_VOICE": "voice",
    "DRESSME_AUDIO_FORMAT": "audio_format",
    "DRESSME_TEMPERATURE": "temperature",
    "DRESSME_REQUEST_TIMEOUT": "request_timeout",
    "DRESSME_RESOURCE_TIMEOUT": "resource_timeout",
    "DRESSME_CAMERA_INDEX": "camera_index",
    "DRESSME_LOG_LEVEL": "log_level",
}


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build settings from environment variables.

    Empty values count as unset.

    Args:
        environ: Mapping to read instead of os.environ

    Raises:
        pydantic.ValidationError: If a value has the wrong type or range
    """
    env = os.environ if environ is None else environ
    values = {
        field_name: env[var]
        for var, field_name in ENV_VARS.items()
        if env.get(var, "").strip()
    }
    return Settings(**values)
