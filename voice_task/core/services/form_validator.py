"""
Field validation for a decoded upload form.
"""
from typing import Sequence

from ..exceptions import InvalidAudioFile, MissingAudioFile, MissingField, UnsupportedModel
from ..models.voice_task import ParsedForm

WEBM_MIME_MARKER = "/webm"


def validate_form(
    form: ParsedForm,
    text_to_task_models: Sequence[str],
    speech_to_text_models: Sequence[str]
) -> ParsedForm:
    """
    Validate a decoded form, failing on the first problem found.

    Checks run in a fixed order: required fields, model allow-lists, then
    the audio file.

    Args:
        form: Form produced by the multipart decoder
        text_to_task_models: Allowed TextToTaskLLM identifiers
        speech_to_text_models: Allowed SpeachToTextLLM identifiers

    Returns:
        The same form, now known to be complete

    Raises:
        MissingField: If a required text field is absent or empty
        UnsupportedModel: If a model identifier is not allowed
        InvalidAudioFile: If the file is missing or not webm audio
    """
    if not form.timestamp:
        raise MissingField("timestamp")
    if not form.text_to_task_model:
        raise MissingField("TextToTaskLLM")
    if not form.speech_to_text_model:
        raise MissingField("SpeachToTextLLM")

    if form.text_to_task_model not in text_to_task_models:
        raise UnsupportedModel("TextToTaskLLM", form.text_to_task_model, text_to_task_models)
    if form.speech_to_text_model not in speech_to_text_models:
        raise UnsupportedModel("SpeachToTextLLM", form.speech_to_text_model, speech_to_text_models)

    if not form.file_found:
        raise MissingAudioFile()
    if not form.audio_mime_type or WEBM_MIME_MARKER not in form.audio_mime_type:
        raise InvalidAudioFile(form.audio_mime_type)

    return form
