"""
Streaming multipart/form-data decoder.

The request body is fed to python-multipart's MultipartParser in fixed-size
chunks. Text fields are captured by name and the first file part is
accumulated into a BoundedBuffer, so an oversized upload aborts the parse
as soon as the limit is crossed instead of after the whole body is read.
"""
from typing import Dict, Iterator, Optional

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from ...infrastructure.logging.log_config import get_logger
from ..exceptions import MalformedMultipart
from ..models.voice_task import ParsedForm
from .bounded_buffer import BoundedBuffer

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
MAX_FIELD_SIZE_BYTES = 1024 * 1024
DEFAULT_FILE_MIME_TYPE = "application/octet-stream"

# Multipart field name -> ParsedForm attribute
FORM_FIELDS: Dict[str, str] = {
    "timestamp": "timestamp",
    "TextToTaskLLM": "text_to_task_model",
    "SpeachToTextLLM": "speech_to_text_model",
}


class _FormBuilder:
    """Parser callbacks that build a ParsedForm part by part."""

    def __init__(self, max_file_bytes: int):
        self.form = ParsedForm()
        self.finished = False
        self._max_file_bytes = max_file_bytes
        self._audio: Optional[BoundedBuffer] = None
        self._reset_part()

    def _reset_part(self) -> None:
        self._headers: Dict[str, str] = {}
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._field_name: Optional[str] = None
        self._field_value: Optional[BoundedBuffer] = None
        self._sink: Optional[BoundedBuffer] = None

    def callbacks(self) -> Dict[str, object]:
        return {
            'on_part_begin': self.on_part_begin,
            'on_header_field': self.on_header_field,
            'on_header_value': self.on_header_value,
            'on_header_end': self.on_header_end,
            'on_headers_finished': self.on_headers_finished,
            'on_part_data': self.on_part_data,
            'on_part_end': self.on_part_end,
            'on_end': self.on_end,
        }

    def on_part_begin(self) -> None:
        self._reset_part()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field.extend(data[start:end])

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value.extend(data[start:end])

    def on_header_end(self) -> None:
        name = self._header_field.decode('latin-1').strip().lower()
        self._headers[name] = self._header_value.decode('latin-1').strip()
        self._header_field = bytearray()
        self._header_value = bytearray()

    def on_headers_finished(self) -> None:
        disposition, options = parse_options_header(self._headers.get('content-disposition'))
        if disposition != b'form-data' or b'name' not in options:
            logger.debug("Skipping part without form-data name", extra={
                'extra_fields': {"headers": list(self._headers)}
            })
            return

        name = options[b'name'].decode('utf-8', errors='replace')
        filename = options.get(b'filename', options.get(b'filename*'))

        if filename is None:
            if name in FORM_FIELDS:
                self._field_name = name
                self._field_value = BoundedBuffer(MAX_FIELD_SIZE_BYTES)
                self._sink = self._field_value
            return

        if self.form.file_found:
            logger.debug("Ignoring additional file part", extra={
                'extra_fields': {"field_name": name}
            })
            return

        mime_type = self._headers.get('content-type') or DEFAULT_FILE_MIME_TYPE
        self.form.file_found = True
        self.form.audio_mime_type = mime_type
        self.form.audio_filename = filename.decode('utf-8', errors='replace')
        self._audio = BoundedBuffer(self._max_file_bytes)
        self._sink = self._audio

        logger.debug("Audio file part started", extra={
            'extra_fields': {"field_name": name, "mime_type": mime_type}
        })

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        if self._sink is not None:
            self._sink.append(bytes(data[start:end]))

    def on_part_end(self) -> None:
        if self._field_name is not None and self._field_value is not None:
            value = self._field_value.getvalue().decode('utf-8', errors='replace')
            setattr(self.form, FORM_FIELDS[self._field_name], value)
        if self._sink is self._audio and self._audio is not None:
            self.form.audio_bytes = self._audio.getvalue()
        self._reset_part()

    def on_end(self) -> None:
        self.finished = True


class MultipartFormDecoder:
    """
    Decoder for the voice upload form.

    Extracts the timestamp and both model identifiers plus the first file
    part, enforcing the audio size limit while the body streams in.
    """

    def __init__(self, max_file_bytes: int, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize the decoder.

        Args:
            max_file_bytes: Maximum accumulated size of the audio file part
            chunk_size: Number of body bytes handed to the parser per write
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.max_file_bytes = max_file_bytes
        self.chunk_size = chunk_size

    @staticmethod
    def extract_boundary(content_type: str) -> bytes:
        """
        Read the boundary parameter from a multipart content-type header.

        Raises:
            MalformedMultipart: If no boundary is declared
        """
        _, options = parse_options_header(content_type)
        boundary = options.get(b'boundary')
        if not boundary:
            raise MalformedMultipart("Missing multipart boundary")
        return boundary

    def iter_chunks(self, body: bytes) -> Iterator[bytes]:
        for offset in range(0, len(body), self.chunk_size):
            yield body[offset:offset + self.chunk_size]

    def decode(self, body: bytes, content_type: str) -> ParsedForm:
        """
        Decode a multipart body into a ParsedForm.

        Args:
            body: Raw request body, already transport-decoded
            content_type: The request's content-type header

        Returns:
            ParsedForm with whatever fields and file the body carried

        Raises:
            PayloadTooLarge: As soon as the file part exceeds the limit
            MalformedMultipart: On any parser error or a truncated body
        """
        boundary = self.extract_boundary(content_type)
        builder = _FormBuilder(self.max_file_bytes)
        parser = MultipartParser(boundary, builder.callbacks())

        try:
            for chunk in self.iter_chunks(body):
                parser.write(chunk)
            parser.finalize()
        except MultipartParseError as e:
            logger.warning("Multipart parse error", extra={
                'extra_fields': {"error": str(e), "body_size_bytes": len(body)}
            })
            raise MalformedMultipart(str(e)) from e

        if not builder.finished:
            raise MalformedMultipart("Unexpected end of multipart body")

        logger.info("Multipart body decoded", extra={
            'extra_fields': builder.form.summary()
        })
        return builder.form
