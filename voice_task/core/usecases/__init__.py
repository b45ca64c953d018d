"""Use cases of the Voice-to-Task Gateway."""

from .voice_to_task import VoiceToTaskUseCase

__all__ = ['VoiceToTaskUseCase']
