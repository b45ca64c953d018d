"""Structured logging for the Voice-to-Task Gateway."""

from .log_config import configure_logging, get_logger
from .log_decorators import log_operation

__all__ = ['configure_logging', 'get_logger', 'log_operation']
