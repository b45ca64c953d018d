"""
Lambda presentation layer handler for voice-to-task requests.

Translates an API Gateway / Function URL proxy event into an
IncomingRequest, runs the use case and maps every outcome to a JSON proxy
response. This is the only place where exceptions are turned into status
codes.
"""
import json
import traceback
from typing import Any, Dict, Optional

from .. import __version__
from ..application.dependencies import get_container
from ..config.settings import VoiceTaskSettings
from ..core.exceptions import InternalFault, VoiceTaskError
from ..core.models.voice_task import IncomingRequest
from ..infrastructure.logging.log_config import get_logger

logger = get_logger(__name__)


def _response(status_code: int, body: Dict[str, Any], request_id: Optional[str] = None) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json"}
    if request_id:
        headers["X-Request-ID"] = request_id
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body)
    }


def _request_id(context: Any) -> Optional[str]:
    return getattr(context, 'aws_request_id', None) if context is not None else None


def _internal_fault(
    error: Exception,
    request_id: Optional[str],
    settings: Optional[VoiceTaskSettings]
) -> InternalFault:
    """
    Build the catch-all error.

    Fault text and traceback are only exposed to the caller in development;
    elsewhere they stay in the logs.
    """
    details: Dict[str, Any] = {"request_id": request_id}
    if settings is not None and settings.is_development:
        details["message"] = str(error)
        details["stack"] = traceback.format_exc()
    return InternalFault(details)


def lambda_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    AWS Lambda handler for voice-to-task conversion.

    Args:
        event: Lambda proxy event carrying a multipart/form-data upload
        context: AWS Lambda context

    Returns:
        Proxy response with a JSON body: {timestamp, transcription, task} on
        success, {error, ...} otherwise
    """
    request_id = _request_id(context)
    settings: Optional[VoiceTaskSettings] = None

    logger.info("Voice-to-task Lambda invoked", extra={'extra_fields': {
        "request_id": request_id,
        "function_name": getattr(context, 'function_name', None)
    }})

    try:
        container = get_container()
        settings = container.get_settings()

        request = IncomingRequest.from_lambda_event(event or {})
        result = container.get_voice_to_task_use_case().execute(request)

        logger.info("Voice-to-task request completed", extra={'extra_fields': {
            "request_id": request_id,
            "request_timestamp": result.timestamp,
            "transcript_length": len(result.transcription)
        }})
        return _response(200, result.to_dict(), request_id)

    except VoiceTaskError as e:
        logger.warning("Voice-to-task request rejected", extra={'extra_fields': {
            "request_id": request_id,
            "error_code": e.error_code,
            "status_code": e.status_code,
            "error": e.message
        }})
        return _response(e.status_code, e.to_response_body(), request_id)

    except Exception as e:
        logger.exception("Unhandled error in voice-to-task Lambda", extra={'extra_fields': {
            "request_id": request_id,
            "error_type": type(e).__name__,
            "error": str(e)
        }})
        fault = _internal_fault(e, request_id, settings)
        return _response(fault.status_code, fault.to_response_body(), request_id)


def health_check_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Health check endpoint for the voice-to-task Lambda.

    Reports whether configuration loads; collaborators are not contacted.
    """
    request_id = _request_id(context)

    try:
        settings = get_container().get_settings()
        return _response(200, {
            "status": "healthy",
            "service": settings.service_name,
            "version": __version__,
            "environment": settings.environment,
            "speech_to_text_configured": bool(settings.openai_api_key),
            "text_to_task_configured": bool(settings.text_to_task_api_url)
        }, request_id)

    except Exception as e:
        logger.error("Health check failed", extra={'extra_fields': {"error": str(e)}})
        return _response(500, {
            "status": "unhealthy",
            "error": type(e).__name__
        }, request_id)
