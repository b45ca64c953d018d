"""
Domain models for the voice-to-task pipeline.

IncomingRequest is built once per invocation from the Lambda proxy event,
ParsedForm is filled in while the multipart body streams through the
decoder, and VoiceTaskResult is what the caller receives on success.
"""
import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import MalformedMultipart


class PipelineStage(str, Enum):
    """Per-request pipeline states."""
    VALIDATING = "validating"
    DECODING = "decoding"
    CALLING_SPEECH_TO_TEXT = "calling_speech_to_text"
    CALLING_TEXT_TO_TASK = "calling_text_to_task"
    RESPONDING = "responding"
    FAILED = "failed"


@dataclass(frozen=True)
class IncomingRequest:
    """
    Immutable view of one HTTP invocation.

    The body is kept exactly as the event carried it; transport decoding is
    deferred to decode_body() so method and content-type checks never depend
    on body content.

    Attributes:
        method: HTTP method as sent by the client
        headers: Request headers as received
        body: Body as carried by the event, possibly base64 text
        is_base64_encoded: Whether the event carried a base64 body
    """
    method: Optional[str]
    headers: Mapping[str, str]
    body: Union[str, bytes]
    is_base64_encoded: bool = False

    @classmethod
    def from_lambda_event(cls, event: Dict[str, Any]) -> "IncomingRequest":
        """
        Build a request from an API Gateway / Function URL proxy event.

        Args:
            event: Lambda proxy event (REST v1 or HTTP API v2 payload)

        Returns:
            IncomingRequest holding the body as received
        """
        request_context = event.get('requestContext') or {}
        http_context = request_context.get('http') or {}
        method = http_context.get('method') or event.get('httpMethod')

        return cls(
            method=method,
            headers=dict(event.get('headers') or {}),
            body=event.get('body') or '',
            is_base64_encoded=bool(event.get('isBase64Encoded', False))
        )

    def decode_body(self) -> bytes:
        """
        Undo the transport encoding of the body.

        Raises:
            MalformedMultipart: If a base64 body cannot be decoded
        """
        if self.is_base64_encoded:
            try:
                return base64.b64decode(self.body)
            except (binascii.Error, ValueError) as e:
                raise MalformedMultipart(f"Invalid base64 body: {e}") from e
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode('utf-8')

    def header(self, name: str) -> Optional[str]:
        """Look up a header value regardless of the key's casing."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


@dataclass
class ParsedForm:
    """Fields extracted from the multipart body."""
    timestamp: Optional[str] = None
    text_to_task_model: Optional[str] = None
    speech_to_text_model: Optional[str] = None
    audio_bytes: bytes = b''
    audio_mime_type: Optional[str] = None
    audio_filename: Optional[str] = None
    file_found: bool = False

    def summary(self) -> Dict[str, Any]:
        """Loggable summary without the audio payload."""
        return {
            "request_timestamp": self.timestamp,
            "text_to_task_model": self.text_to_task_model,
            "speech_to_text_model": self.speech_to_text_model,
            "file_found": self.file_found,
            "audio_mime_type": self.audio_mime_type,
            "audio_size_bytes": len(self.audio_bytes)
        }


@dataclass(frozen=True)
class VoiceTaskResult:
    """Combined outcome of both collaborator calls."""
    timestamp: str
    transcription: str
    task: Any = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "transcription": self.transcription,
            "task": self.task
        }
