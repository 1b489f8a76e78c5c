"""Request middleware and dependencies."""

from .auth import require_stream_user, require_user, validate_token
from .request_context import REQUEST_ID_HEADER, RequestContextMiddleware

__all__ = [
    "require_user",
    "require_stream_user",
    "validate_token",
    "RequestContextMiddleware",
    "REQUEST_ID_HEADER",
]
