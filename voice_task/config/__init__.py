"""Configuration module for the Voice-to-Task Gateway."""

from .settings import VoiceTaskSettings, get_settings, reset_settings

__all__ = ['VoiceTaskSettings', 'get_settings', 'reset_settings']
