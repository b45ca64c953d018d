"""Transcription adapters for speech-to-text services."""

from .whisper_transcription_adapter import WhisperTranscriptionAdapter

__all__ = ['WhisperTranscriptionAdapter']
