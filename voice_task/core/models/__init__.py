"""
Core domain models for the Voice-to-Task Gateway.
"""
from .voice_task import (
    IncomingRequest,
    ParsedForm,
    PipelineStage,
    VoiceTaskResult
)

__all__ = [
    "IncomingRequest",
    "ParsedForm",
    "PipelineStage",
    "VoiceTaskResult"
]
