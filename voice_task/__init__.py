"""
Voice-to-Task Gateway.

Serverless handler that turns an uploaded voice recording into a structured
task by chaining a speech-to-text service and a text-to-task service.
"""

__version__ = "1.0.0"
