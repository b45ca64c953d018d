"""Adapters for text-to-task services."""

from .http_text_to_task_adapter import HttpTextToTaskAdapter

__all__ = ['HttpTextToTaskAdapter']
