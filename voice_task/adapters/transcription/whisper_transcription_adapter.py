"""
OpenAI Whisper transcription adapter.

Implements SpeechToTextPort by posting the uploaded audio as a multipart
file to an OpenAI-compatible /audio/transcriptions endpoint.
"""
from typing import Optional

import requests

from ...core.exceptions import ConfigurationError, UpstreamError
from ...core.ports.speech_to_text import SpeechToTextPort
from ...infrastructure.logging.log_decorators import log_operation
from ..http_response import BAD_GATEWAY, parse_json_response, transport_error

COLLABORATOR = "speech-to-text"
UPLOAD_FILENAME = "audio.webm"


class WhisperTranscriptionAdapter(SpeechToTextPort):
    """
    Speech-to-text collaborator backed by the OpenAI transcription API.

    The API key is checked on every call so a missing credential surfaces
    as a ConfigurationError before any network traffic.
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the adapter.

        Args:
            api_url: Full transcription endpoint URL
            api_key: Bearer credential; may be None until a call is made
            timeout_seconds: Connect/read timeout for the request
            session: HTTP session, created lazily when omitted
        """
        self.api_url = api_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Get HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    @log_operation("speech_to_text", sensitive_fields={"audio_bytes"})
    def transcribe(self, audio_bytes: bytes, mime_type: str, model: str) -> str:
        if not self.api_key:
            raise ConfigurationError("Missing OpenAI API key")

        try:
            response = self.session.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                files={"file": (UPLOAD_FILENAME, audio_bytes, mime_type)},
                data={"model": model},
                timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise transport_error(COLLABORATOR, e) from e

        result = parse_json_response(response, COLLABORATOR)

        text = result.get("text") if isinstance(result, dict) else None
        if not isinstance(text, str):
            raise UpstreamError(COLLABORATOR, BAD_GATEWAY, "Response has no transcript text field")

        return text
