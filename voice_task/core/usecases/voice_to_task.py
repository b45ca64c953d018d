"""
Voice-to-task use case.

Runs one invocation through the whole pipeline:
validate request -> decode multipart -> validate form ->
speech-to-text -> text-to-task -> combined result.

Stages are strictly sequential; the text-to-task call only starts once a
transcript exists. Any failure ends the pipeline with no retries.
"""
import time
from typing import Optional

from ...config.settings import VoiceTaskSettings
from ...infrastructure.logging.log_config import get_logger
from ..exceptions import VoiceTaskError
from ..models.voice_task import IncomingRequest, ParsedForm, PipelineStage, VoiceTaskResult
from ..ports.speech_to_text import SpeechToTextPort
from ..ports.text_to_task import TextToTaskPort
from ..services.form_validator import validate_form
from ..services.multipart_decoder import MultipartFormDecoder
from ..services.request_validator import validate_request

logger = get_logger(__name__)


class VoiceToTaskUseCase:
    """
    Orchestrates request validation and both collaborator calls.

    Collaborators and settings are injected so tests can substitute fakes.
    """

    def __init__(
        self,
        settings: VoiceTaskSettings,
        speech_to_text: SpeechToTextPort,
        text_to_task: TextToTaskPort,
        decoder: Optional[MultipartFormDecoder] = None
    ):
        """
        Initialize the use case.

        Args:
            settings: Immutable process configuration
            speech_to_text: Transcription collaborator
            text_to_task: Task derivation collaborator
            decoder: Multipart decoder, built from settings when omitted
        """
        self.settings = settings
        self.speech_to_text = speech_to_text
        self.text_to_task = text_to_task
        self.decoder = decoder or MultipartFormDecoder(settings.max_audio_file_size_bytes)

    def execute(self, request: IncomingRequest) -> VoiceTaskResult:
        """
        Process one invocation.

        Args:
            request: Incoming HTTP request

        Returns:
            VoiceTaskResult with timestamp, transcription and task

        Raises:
            VoiceTaskError: Any recognised validation, configuration or
                collaborator failure
        """
        start_time = time.time()
        stage = PipelineStage.VALIDATING

        try:
            content_type = validate_request(request)

            stage = self._advance(PipelineStage.DECODING, is_base64_encoded=request.is_base64_encoded)
            body = request.decode_body()
            form = self.decoder.decode(body, content_type)
            form = validate_form(
                form,
                self.settings.text_to_task_models,
                self.settings.speech_to_text_models
            )

            stage = self._advance(PipelineStage.CALLING_SPEECH_TO_TEXT, **form.summary())
            transcription = self.speech_to_text.transcribe(
                form.audio_bytes,
                form.audio_mime_type,
                self.settings.speech_to_text_model
            )

            stage = self._advance(PipelineStage.CALLING_TEXT_TO_TASK, transcript_length=len(transcription))
            task = self.text_to_task.create_task(transcription, form.text_to_task_model)

            stage = self._advance(
                PipelineStage.RESPONDING,
                duration_ms=round((time.time() - start_time) * 1000, 2)
            )
            return self._build_result(form, transcription, task)

        except VoiceTaskError as e:
            logger.warning("Voice-to-task pipeline failed", extra={'extra_fields': {
                "stage": PipelineStage.FAILED.value,
                "failed_during": stage.value,
                "error_code": e.error_code,
                "status_code": e.status_code,
                "error": e.message
            }})
            raise

    def _advance(self, stage: PipelineStage, **context) -> PipelineStage:
        logger.info(f"Pipeline stage: {stage.value}", extra={
            'extra_fields': {"stage": stage.value, **context}
        })
        return stage

    @staticmethod
    def _build_result(form: ParsedForm, transcription: str, task) -> VoiceTaskResult:
        return VoiceTaskResult(
            timestamp=form.timestamp,
            transcription=transcription,
            task=task
        )
