"""Ports (interfaces) for the external collaborators."""

from .speech_to_text import SpeechToTextPort
from .text_to_task import TextToTaskPort

__all__ = ['SpeechToTextPort', 'TextToTaskPort']
