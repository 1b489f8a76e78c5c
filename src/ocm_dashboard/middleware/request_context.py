"""Request ID propagation for log correlation.

Written as a plain ASGI middleware so streaming responses pass through
untouched.
"""

from uuid import uuid4

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ocm_shared.observability import RequestContextManager

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


class RequestContextMiddleware:
    """Binds a request ID to every log record of a request.

    An incoming ``X-Request-ID`` is reused when present; otherwise a new
    one is generated. The ID is echoed on the response.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._request_id(scope)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        with RequestContextManager(request_id=request_id):
            await self.app(scope, receive, send_with_request_id)

    @staticmethod
    def _request_id(scope: Scope) -> str:
        for name, value in scope.get("headers", []):
            if name == b"x-request-id":
                candidate = value.decode("latin-1").strip()
                if 0 < len(candidate) <= MAX_REQUEST_ID_LENGTH:
                    return candidate
        return uuid4().hex
