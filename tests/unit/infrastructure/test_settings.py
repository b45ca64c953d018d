"""
Unit tests for environment-driven settings.
"""
import pytest
from pydantic import ValidationError

from voice_task.config.settings import (
    DEFAULT_OPENAI_API_URL,
    DEFAULT_SPEECH_TO_TEXT_MODEL,
    VoiceTaskSettings,
    get_settings,
    reset_settings,
)

SETTINGS_ENV_VARS = (
    "ENVIRONMENT", "LOG_LEVEL", "SERVICE_NAME", "MAX_AUDIO_FILE_SIZE_BYTES",
    "OPENAI_API_URL", "OPENAI_API_KEY", "TEXT_TO_TASK_API_URL",
    "UPSTREAM_TIMEOUT_SECONDS", "SPEECH_TO_TEXT_MODEL", "SUPPORTED_TEXT_TO_TASK_LLM",
    "SUPPORTED_SPEECH_TO_TEXT_LLM",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TEXT_TO_TASK_API_URL", "https://tasks.example.com/text-to-task")
    return monkeypatch


@pytest.mark.unit
class TestVoiceTaskSettings:
    """Test VoiceTaskSettings loading and derived properties."""

    def test_defaults(self, clean_env):
        settings = VoiceTaskSettings(_env_file=None)

        assert settings.environment == "development"
        assert settings.max_audio_file_size_bytes == 25 * 1024 * 1024
        assert settings.openai_api_url == DEFAULT_OPENAI_API_URL
        assert settings.openai_api_key is None
        assert settings.speech_to_text_model == DEFAULT_SPEECH_TO_TEXT_MODEL == "whisper-1"
        assert settings.upstream_timeout_seconds == 30.0
        assert settings.text_to_task_models == ()
        assert settings.speech_to_text_models == ()

    def test_loads_from_environment(self, clean_env):
        clean_env.setenv("MAX_AUDIO_FILE_SIZE_BYTES", "1000")
        clean_env.setenv("OPENAI_API_KEY", "sk-env")
        clean_env.setenv("SUPPORTED_TEXT_TO_TASK_LLM", "gpt-x, gpt-y ,,")
        clean_env.setenv("SUPPORTED_SPEECH_TO_TEXT_LLM", "whisper-1")
        clean_env.setenv("ENVIRONMENT", "production")

        settings = VoiceTaskSettings(_env_file=None)

        assert settings.max_audio_file_size_bytes == 1000
        assert settings.openai_api_key == "sk-env"
        assert settings.text_to_task_models == ("gpt-x", "gpt-y")
        assert settings.speech_to_text_models == ("whisper-1",)
        assert settings.is_production
        assert not settings.is_development

    def test_text_to_task_url_is_optional(self, clean_env):
        clean_env.delenv("TEXT_TO_TASK_API_URL")

        assert VoiceTaskSettings(_env_file=None).text_to_task_api_url is None

    def test_transcription_model_from_environment(self, clean_env):
        clean_env.setenv("SPEECH_TO_TEXT_MODEL", "whisper-2")

        assert VoiceTaskSettings(_env_file=None).speech_to_text_model == "whisper-2"

    @pytest.mark.parametrize("name,value", [
        ("MAX_AUDIO_FILE_SIZE_BYTES", "0"),
        ("MAX_AUDIO_FILE_SIZE_BYTES", "-5"),
        ("UPSTREAM_TIMEOUT_SECONDS", "0"),
    ])
    def test_rejects_non_positive_limits(self, clean_env, name, value):
        clean_env.setenv(name, value)

        with pytest.raises(ValidationError):
            VoiceTaskSettings(_env_file=None)

    def test_settings_are_immutable(self, test_settings):
        with pytest.raises(ValidationError):
            test_settings.max_audio_file_size_bytes = 5

    def test_get_settings_is_cached_until_reset(self, clean_env):
        first = get_settings()

        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
