"""
Speech-to-text port.

Defines the contract for transcription collaborators without tying the
pipeline to a particular HTTP client or vendor.
"""
from abc import ABC, abstractmethod


class SpeechToTextPort(ABC):
    """
    Port (interface) for audio transcription.

    Implementations send the audio to a speech recognition service and
    return the transcript text unmodified.
    """

    @abstractmethod
    def transcribe(self, audio_bytes: bytes, mime_type: str, model: str) -> str:
        """
        Transcribe an audio recording.

        Args:
            audio_bytes: Raw audio bytes as uploaded
            mime_type: Declared MIME type of the upload
            model: Transcription model name sent to the collaborator

        Returns:
            Transcript text

        Raises:
            ConfigurationError: If the collaborator credential is missing
            UpstreamError: If the collaborator rejects the request
        """
        pass
