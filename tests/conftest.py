"""
Shared test configuration and fixtures for the Voice-to-Task Gateway tests.
"""
import base64
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from unittest.mock import Mock

import pytest

# Setup Python path once for all tests
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from voice_task.application import dependencies
from voice_task.config.settings import VoiceTaskSettings, reset_settings


BOUNDARY = "----VoiceTaskBoundary7MA4YWxkTrZu0gW"
MULTIPART_CONTENT_TYPE = f"multipart/form-data; boundary={BOUNDARY}"

# (field name, filename, content type or None, payload)
FilePart = Tuple[str, str, Optional[str], bytes]


def build_multipart_body(
    fields: Optional[Dict[str, str]] = None,
    files: Optional[List[FilePart]] = None,
    boundary: str = BOUNDARY,
    closed: bool = True
) -> bytes:
    """Build a multipart/form-data body the way a browser would."""
    chunks = []
    for name, value in (fields or {}).items():
        chunks.append(
            f'--{boundary}\r\n'
            f'Content-Disposition: form-data; name="{name}"\r\n'
            f'\r\n'
            f'{value}\r\n'.encode('utf-8')
        )
    for name, filename, content_type, payload in (files or []):
        header = (
            f'--{boundary}\r\n'
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
        )
        if content_type:
            header += f'Content-Type: {content_type}\r\n'
        chunks.append(header.encode('utf-8') + b'\r\n' + payload + b'\r\n')
    if closed:
        chunks.append(f'--{boundary}--\r\n'.encode('utf-8'))
    return b''.join(chunks)


def build_lambda_event(
    body: bytes,
    method: str = "POST",
    content_type: Optional[str] = MULTIPART_CONTENT_TYPE,
    header_name: str = "content-type",
    base64_encoded: bool = True,
    payload_version: str = "2.0"
) -> Dict:
    """Build an API Gateway proxy event around a raw body."""
    headers = {header_name: content_type} if content_type is not None else {}
    event = {
        "headers": headers,
        "body": base64.b64encode(body).decode('ascii') if base64_encoded else body.decode('utf-8'),
        "isBase64Encoded": base64_encoded
    }
    if payload_version == "2.0":
        event["version"] = "2.0"
        event["requestContext"] = {"http": {"method": method, "path": "/"}}
    else:
        event["httpMethod"] = method
    return event


@pytest.fixture
def valid_fields() -> Dict[str, str]:
    return {
        "timestamp": "t1",
        "TextToTaskLLM": "gpt-x",
        "SpeachToTextLLM": "whisper-1"
    }


@pytest.fixture
def webm_audio() -> bytes:
    """Ten bytes starting with the EBML magic number used by webm."""
    return b'\x1a\x45\xdf\xa3' + b'\x00' * 6


@pytest.fixture
def valid_body(valid_fields, webm_audio) -> bytes:
    return build_multipart_body(
        fields=valid_fields,
        files=[("audio", "recording.webm", "audio/webm", webm_audio)]
    )


@pytest.fixture
def settings_factory():
    """Create VoiceTaskSettings without touching the process environment."""
    def factory(**overrides) -> VoiceTaskSettings:
        values = {
            "environment": "test",
            "max_audio_file_size_bytes": 1000,
            "openai_api_url": "https://stt.example.com/v1/audio/transcriptions",
            "openai_api_key": "sk-test",
            "text_to_task_api_url": "https://tasks.example.com/text-to-task",
            "supported_text_to_task_llm": "gpt-x,gpt-y",
            "supported_speech_to_text_llm": "whisper-1",
            "upstream_timeout_seconds": 5
        }
        values.update(overrides)
        return VoiceTaskSettings(**values)
    return factory


@pytest.fixture
def test_settings(settings_factory) -> VoiceTaskSettings:
    return settings_factory()


@pytest.fixture
def mock_speech_to_text() -> Mock:
    mock = Mock()
    mock.transcribe.return_value = "buy milk tomorrow"
    return mock


@pytest.fixture
def mock_text_to_task() -> Mock:
    mock = Mock()
    mock.create_task.return_value = {"title": "Buy milk", "due": "tomorrow"}
    return mock


@pytest.fixture
def mock_lambda_context() -> Mock:
    """Mock Lambda context for testing."""
    context = Mock()
    context.function_name = 'voice-task-gateway'
    context.aws_request_id = 'test-request-id-123'
    context.get_remaining_time_in_millis.return_value = 30000
    return context


def make_http_response(status_code: int, text: str) -> Mock:
    """Mock requests.Response with just the attributes the adapters read."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    return response


@pytest.fixture(autouse=True)
def reset_global_state():
    """Keep cached settings and the dependency container isolated per test."""
    reset_settings()
    dependencies.configure_dependencies()
    yield
    reset_settings()
    dependencies.configure_dependencies()
