"""
Request-level checks performed before the body is parsed.
"""
from ..exceptions import InvalidContentType, MethodNotAllowed
from ..models.voice_task import IncomingRequest

MULTIPART_FORM_DATA = "multipart/form-data"


def validate_request(request: IncomingRequest) -> str:
    """
    Check the HTTP method and content type of an invocation.

    Args:
        request: Incoming request

    Returns:
        The content-type header value, needed later for the boundary

    Raises:
        MethodNotAllowed: If the method is not POST
        InvalidContentType: If the body is not declared as multipart/form-data
    """
    if request.method != "POST":
        raise MethodNotAllowed(request.method)

    content_type = request.header("Content-Type")
    if not content_type or MULTIPART_FORM_DATA not in content_type:
        raise InvalidContentType(content_type)

    return content_type
