"""
Error taxonomy for the voice-to-task pipeline.

Every failure a caller can observe is a VoiceTaskError subclass that knows
its HTTP status code and how to render itself as a JSON response body.
"""
from typing import Any, Dict, Optional, Sequence


class VoiceTaskError(Exception):
    """Base exception for all recognised pipeline failures."""

    status_code: int = 500
    error_code: str = "VOICE_TASK_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the error.

        Args:
            message: Human-readable message returned as the "error" field
            details: Extra fields merged into the response body
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response_body(self) -> Dict[str, Any]:
        """Render the JSON body returned to the caller."""
        body: Dict[str, Any] = {"error": self.message}
        body.update(self.details)
        return body


class MethodNotAllowed(VoiceTaskError):
    """Raised for any HTTP method other than POST."""

    status_code = 405
    error_code = "METHOD_NOT_ALLOWED"

    def __init__(self, method: Optional[str] = None):
        super().__init__("Method Not Allowed")
        self.method = method


class InvalidContentType(VoiceTaskError):
    """Raised when the request is not multipart/form-data."""

    status_code = 400
    error_code = "INVALID_CONTENT_TYPE"

    def __init__(self, content_type: Optional[str] = None):
        super().__init__("Missing or invalid content type")
        self.content_type = content_type


class MalformedMultipart(VoiceTaskError):
    """Raised when the multipart body cannot be decoded."""

    status_code = 400
    error_code = "MALFORMED_MULTIPART"

    def __init__(self, reason: str):
        super().__init__("Malformed multipart body", {"reason": reason})
        self.reason = reason


class PayloadTooLarge(VoiceTaskError):
    """Raised as soon as the accumulated audio exceeds the size limit."""

    status_code = 413
    error_code = "PAYLOAD_TOO_LARGE"

    def __init__(self, max_bytes: int):
        super().__init__("Payload Too Large", {"max_bytes": max_bytes})
        self.max_bytes = max_bytes


class MissingField(VoiceTaskError):
    """Raised when a required form field is absent or empty."""

    status_code = 400
    error_code = "MISSING_FIELD"

    def __init__(self, field: str):
        super().__init__(f"Missing {field} parameter", {"field": field})
        self.field = field


class UnsupportedModel(VoiceTaskError):
    """Raised when a model identifier is not in its role's allow-list."""

    status_code = 400
    error_code = "UNSUPPORTED_MODEL"

    def __init__(self, field: str, provided: str, supported: Sequence[str]):
        super().__init__(f"Unsupported {field}", {
            "supported": list(supported),
            "provided": provided
        })
        self.field = field
        self.provided = provided
        self.supported = tuple(supported)


class InvalidAudioFile(VoiceTaskError):
    """Raised when the uploaded file is not a webm audio recording."""

    status_code = 400
    error_code = "INVALID_AUDIO_FILE"

    def __init__(self, mime_type: Optional[str] = None):
        super().__init__("Missing or invalid audio file")
        self.mime_type = mime_type


class MissingAudioFile(InvalidAudioFile):
    """Raised when the multipart body carried no file part at all."""

    error_code = "MISSING_AUDIO_FILE"

    def __init__(self):
        super().__init__(None)
        self.details = {"field": "file"}


class ConfigurationError(VoiceTaskError):
    """Raised when process configuration needed for a call is missing."""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class UpstreamError(VoiceTaskError):
    """
    Raised when a collaborator call fails.

    The collaborator's own status code is passed through to the caller
    together with its raw response body.
    """

    error_code = "UPSTREAM_ERROR"

    LABELS = {
        "speech-to-text": "OpenAI error",
        "text-to-task": "TextToTask API error"
    }

    def __init__(self, collaborator: str, status_code: int, body: str):
        super().__init__(self.LABELS.get(collaborator, f"{collaborator} error"), {
            "status": status_code,
            "details": body
        })
        self.collaborator = collaborator
        self.status_code = status_code
        self.body = body


class InternalFault(VoiceTaskError):
    """Catch-all for unexpected failures."""

    status_code = 500
    error_code = "INTERNAL_FAULT"

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("Internal server error", details)
