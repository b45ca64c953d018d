"""
Core services for request validation and multipart decoding.
"""
from .bounded_buffer import BoundedBuffer
from .form_validator import validate_form
from .multipart_decoder import MultipartFormDecoder
from .request_validator import validate_request

__all__ = [
    'BoundedBuffer',
    'MultipartFormDecoder',
    'validate_form',
    'validate_request'
]
