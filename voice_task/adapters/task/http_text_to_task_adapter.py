"""
HTTP text-to-task adapter.

Implements TextToTaskPort by posting {"text", "llm"} as JSON to the
configured text-to-task service.
"""
from typing import Any, Optional

import requests

from ...core.exceptions import ConfigurationError
from ...core.ports.text_to_task import TextToTaskPort
from ...infrastructure.logging.log_decorators import log_operation
from ..http_response import parse_json_response, transport_error

COLLABORATOR = "text-to-task"


class HttpTextToTaskAdapter(TextToTaskPort):
    """
    Text-to-task collaborator reached over plain JSON HTTP.

    A missing endpoint URL surfaces as a ConfigurationError on the first
    call, before any network traffic.
    """

    def __init__(
        self,
        api_url: Optional[str],
        timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Get HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    @log_operation("text_to_task", sensitive_fields={"text"})
    def create_task(self, text: str, model: str) -> Any:
        if not self.api_url:
            raise ConfigurationError("Missing TextToTask API URL")

        try:
            response = self.session.post(
                self.api_url,
                json={"text": text, "llm": model},
                timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise transport_error(COLLABORATOR, e) from e

        return parse_json_response(response, COLLABORATOR)
