"""
Shared response handling for collaborator HTTP calls.

Both collaborators follow the same contract: read the whole body as text,
parse it as JSON only on a 2xx status, and otherwise pass the upstream
status and raw body straight back to the caller.
"""
import json
from typing import Any

import requests

from ..core.exceptions import UpstreamError
from ..infrastructure.logging.log_config import get_logger

logger = get_logger(__name__)

# Status reported when the collaborator could not be reached or answered garbage
BAD_GATEWAY = 502


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_json_response(response: requests.Response, collaborator: str) -> Any:
    """
    Turn a collaborator response into parsed JSON.

    Args:
        response: Completed HTTP response
        collaborator: "speech-to-text" or "text-to-task"

    Returns:
        Parsed JSON body

    Raises:
        UpstreamError: On a non-2xx status or a body that is not JSON
    """
    body = response.text

    if not is_success(response.status_code):
        logger.error(f"{collaborator} collaborator returned an error", extra={'extra_fields': {
            "collaborator": collaborator,
            "status": response.status_code,
            "body": body
        }})
        raise UpstreamError(collaborator, response.status_code, body)

    try:
        return json.loads(body)
    except ValueError as e:
        raise UpstreamError(collaborator, BAD_GATEWAY, f"Invalid JSON response: {e}") from e


def transport_error(collaborator: str, error: requests.RequestException) -> UpstreamError:
    """Map a connection failure or timeout to a gateway error."""
    logger.error(f"{collaborator} collaborator unreachable", extra={'extra_fields': {
        "collaborator": collaborator,
        "error_type": type(error).__name__,
        "error": str(error)
    }})
    return UpstreamError(collaborator, BAD_GATEWAY, f"{type(error).__name__}: {error}")
