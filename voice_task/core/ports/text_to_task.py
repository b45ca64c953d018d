"""
Text-to-task port.

Defines the contract for collaborators that derive a structured task from a
transcript.
"""
from abc import ABC, abstractmethod
from typing import Any


class TextToTaskPort(ABC):
    """Port (interface) for transcript-to-task conversion."""

    @abstractmethod
    def create_task(self, text: str, model: str) -> Any:
        """
        Derive a structured task from a transcript.

        Args:
            text: Transcript produced by the speech-to-text collaborator
            model: Text-to-task model identifier chosen by the caller

        Returns:
            Parsed JSON task, passed through to the caller as-is

        Raises:
            UpstreamError: If the collaborator rejects the request
        """
        pass
