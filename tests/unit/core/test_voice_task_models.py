"""
Unit tests for request construction from Lambda proxy events.
"""
import base64

import pytest

from voice_task.core.exceptions import MalformedMultipart
from voice_task.core.models.voice_task import IncomingRequest, ParsedForm, VoiceTaskResult


@pytest.mark.unit
class TestIncomingRequestFromLambdaEvent:
    """Test IncomingRequest.from_lambda_event."""

    def test_http_api_v2_event(self):
        event = {
            "version": "2.0",
            "requestContext": {"http": {"method": "POST"}},
            "headers": {"content-type": "multipart/form-data; boundary=b"},
            "body": base64.b64encode(b'\x00\x01binary').decode('ascii'),
            "isBase64Encoded": True
        }

        request = IncomingRequest.from_lambda_event(event)

        assert request.method == "POST"
        assert request.decode_body() == b'\x00\x01binary'
        assert request.is_base64_encoded is True

    def test_rest_api_v1_event_falls_back_to_http_method(self):
        event = {
            "httpMethod": "GET",
            "requestContext": {"stage": "prod"},
            "headers": {"Content-Type": "text/plain"},
            "body": "hello",
            "isBase64Encoded": False
        }

        request = IncomingRequest.from_lambda_event(event)

        assert request.method == "GET"
        assert request.decode_body() == b'hello'
        assert request.header("content-type") == "text/plain"

    def test_plain_body_is_utf8_encoded(self):
        request = IncomingRequest.from_lambda_event({"httpMethod": "POST", "body": "café"})

        assert request.decode_body() == "café".encode('utf-8')

    def test_missing_headers_and_body(self):
        request = IncomingRequest.from_lambda_event({"httpMethod": "POST", "headers": None, "body": None})

        assert request.headers == {}
        assert request.decode_body() == b''
        assert request.header("content-type") is None

    def test_empty_event_has_no_method(self):
        assert IncomingRequest.from_lambda_event({}).method is None

    def test_invalid_base64_body_fails_only_when_decoded(self):
        event = {"httpMethod": "GET", "body": "abc", "isBase64Encoded": True}

        request = IncomingRequest.from_lambda_event(event)

        assert request.method == "GET"
        assert request.body == "abc"
        with pytest.raises(MalformedMultipart):
            request.decode_body()

    def test_raw_bytes_body_is_returned_unchanged(self):
        request = IncomingRequest(method="POST", headers={}, body=b'\xff\x00')

        assert request.decode_body() == b'\xff\x00'

    def test_header_lookup_prefers_exact_key(self):
        request = IncomingRequest(
            method="POST",
            headers={"Content-Type": "exact", "x-other": "1"},
            body=b''
        )

        assert request.header("Content-Type") == "exact"
        assert request.header("X-OTHER") == "1"
        assert request.header("missing") is None


@pytest.mark.unit
class TestResultModels:
    """Test ParsedForm and VoiceTaskResult helpers."""

    def test_result_to_dict_has_exactly_three_fields(self):
        result = VoiceTaskResult(timestamp="t1", transcription="hello", task={"id": 1})

        assert result.to_dict() == {"timestamp": "t1", "transcription": "hello", "task": {"id": 1}}

    def test_form_summary_omits_audio_payload(self):
        form = ParsedForm(timestamp="t1", audio_bytes=b'12345', file_found=True)

        summary = form.summary()

        assert summary["audio_size_bytes"] == 5
        assert b'12345' not in summary.values()
