"""
Dependency injection configuration for the Voice-to-Task Gateway.

Builds settings, collaborator adapters and the use case once per Lambda
container and reuses them across warm invocations.
"""
from typing import Optional

from ..adapters.task.http_text_to_task_adapter import HttpTextToTaskAdapter
from ..adapters.transcription.whisper_transcription_adapter import WhisperTranscriptionAdapter
from ..config.settings import VoiceTaskSettings, get_settings
from ..core.ports.speech_to_text import SpeechToTextPort
from ..core.ports.text_to_task import TextToTaskPort
from ..core.usecases.voice_to_task import VoiceToTaskUseCase
from ..infrastructure.logging.log_config import configure_logging, get_logger

logger = get_logger(__name__)


class VoiceTaskDependencyContainer:
    """
    Dependency injection container for the voice-to-task handler.

    Every dependency is created lazily and cached (singleton per container).
    """

    def __init__(self, settings: Optional[VoiceTaskSettings] = None):
        self._settings = settings
        self._speech_to_text: Optional[SpeechToTextPort] = None
        self._text_to_task: Optional[TextToTaskPort] = None
        self._voice_to_task_use_case: Optional[VoiceToTaskUseCase] = None

    def get_settings(self) -> VoiceTaskSettings:
        """Get settings, applying their logging options on first load."""
        if self._settings is None:
            self._settings = get_settings()
            configure_logging(
                self._settings.environment,
                self._settings.log_level,
                self._settings.service_name
            )
            logger.debug("Settings loaded", extra={'extra_fields': {
                "environment": self._settings.environment,
                "max_audio_file_size_bytes": self._settings.max_audio_file_size_bytes,
                "text_to_task_models": list(self._settings.text_to_task_models),
                "speech_to_text_models": list(self._settings.speech_to_text_models)
            }})
        return self._settings

    def get_speech_to_text(self) -> SpeechToTextPort:
        """Get speech-to-text adapter (singleton)."""
        if self._speech_to_text is None:
            settings = self.get_settings()
            self._speech_to_text = WhisperTranscriptionAdapter(
                api_url=settings.openai_api_url,
                api_key=settings.openai_api_key,
                timeout_seconds=settings.upstream_timeout_seconds
            )
        return self._speech_to_text

    def get_text_to_task(self) -> TextToTaskPort:
        """Get text-to-task adapter (singleton)."""
        if self._text_to_task is None:
            settings = self.get_settings()
            self._text_to_task = HttpTextToTaskAdapter(
                api_url=settings.text_to_task_api_url,
                timeout_seconds=settings.upstream_timeout_seconds
            )
        return self._text_to_task

    def get_voice_to_task_use_case(self) -> VoiceToTaskUseCase:
        """Get voice-to-task use case (singleton)."""
        if self._voice_to_task_use_case is None:
            self._voice_to_task_use_case = VoiceToTaskUseCase(
                settings=self.get_settings(),
                speech_to_text=self.get_speech_to_text(),
                text_to_task=self.get_text_to_task()
            )
        return self._voice_to_task_use_case

    def reset(self) -> None:
        """Reset all singletons (useful for testing)."""
        self._settings = None
        self._speech_to_text = None
        self._text_to_task = None
        self._voice_to_task_use_case = None


# Global dependency container instance
_container = VoiceTaskDependencyContainer()


def get_container() -> VoiceTaskDependencyContainer:
    """Get the global dependency container."""
    return _container


def configure_dependencies(**overrides) -> VoiceTaskDependencyContainer:
    """
    Replace the global container with one carrying custom implementations.

    Args:
        **overrides: settings, speech_to_text, text_to_task or
            voice_to_task_use_case

    Returns:
        The newly installed container
    """
    global _container

    container = VoiceTaskDependencyContainer(settings=overrides.pop('settings', None))
    for dependency_name, implementation in overrides.items():
        attribute = f'_{dependency_name}'
        if not hasattr(container, attribute):
            raise ValueError(f"Unknown dependency: {dependency_name}")
        setattr(container, attribute, implementation)

    _container = container
    return container
