"""
Settings for the Voice-to-Task Gateway Lambda.

All values are sourced from environment variables (or local env files) once
per process and are immutable afterwards.
"""
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_OPENAI_API_URL = "https://api.openai.com/v1/audio/transcriptions"
DEFAULT_SPEECH_TO_TEXT_MODEL = "whisper-1"


def _split_allow_list(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated allow-list, dropping blank entries."""
    return tuple(item.strip() for item in raw.split(',') if item.strip())


class VoiceTaskSettings(BaseSettings):
    """
    Process-wide configuration.
    Loaded once at cold start and passed explicitly into the pipeline.
    """
    
    # ENVIRONMENT & LOGGING
    environment: str = "development"
    service_name: str = "voice-task-gateway"
    log_level: str = "INFO"
    
    # AUDIO UPLOAD LIMITS
    max_audio_file_size_bytes: int = Field(default=25 * 1024 * 1024, gt=0)
    
    # COLLABORATOR ENDPOINTS
    openai_api_url: str = DEFAULT_OPENAI_API_URL
    openai_api_key: Optional[str] = None
    # Model name sent to the transcription endpoint; SpeachToTextLLM is only allow-listed
    speech_to_text_model: str = DEFAULT_SPEECH_TO_TEXT_MODEL
    text_to_task_api_url: Optional[str] = None
    upstream_timeout_seconds: float = Field(default=30.0, gt=0)
    
    # MODEL ALLOW-LISTS (comma-separated)
    supported_text_to_task_llm: str = ""
    supported_speech_to_text_llm: str = ""
    
    model_config = SettingsConfigDict(
        env_file=[".env.local", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True
    )
    
    @property
    def text_to_task_models(self) -> Tuple[str, ...]:
        """Allowed identifiers for the TextToTaskLLM field."""
        return _split_allow_list(self.supported_text_to_task_llm)
    
    @property
    def speech_to_text_models(self) -> Tuple[str, ...]:
        """Allowed identifiers for the SpeachToTextLLM field."""
        return _split_allow_list(self.supported_speech_to_text_llm)
    
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() in ("development", "dev", "local")
    
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() in ("production", "prod")


_settings: Optional[VoiceTaskSettings] = None


def get_settings() -> VoiceTaskSettings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    
    if _settings is None:
        _settings = VoiceTaskSettings()
    
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads the environment."""
    global _settings
    _settings = None
