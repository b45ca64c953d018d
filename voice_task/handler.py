"""
Lambda entry point for the Voice-to-Task Gateway.

Configure the function handler as ``voice_task.handler.lambda_handler``.
"""

from .presentation.lambda_handler import health_check_handler, lambda_handler

__all__ = ['lambda_handler', 'health_check_handler']
