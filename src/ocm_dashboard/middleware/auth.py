"""Bearer token authentication.

Tokens are validated with a Kubernetes TokenReview against the hub, so
the dashboard accepts exactly the tokens the hub API server accepts.
"""

from fastapi import HTTPException, Query, Request, status

from ocm_shared.config import Settings
from ocm_shared.observability import get_logger, user_var

from ..clients import BaseOCMClient, OCMClientError

logger = get_logger(__name__)

BYPASS_USER = "anonymous"

MISSING_HEADER_MESSAGE = "Authorization header required"
INVALID_FORMAT_MESSAGE = "Invalid authorization header format. Expected: Bearer <token>"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


async def validate_token(client: BaseOCMClient | None, token: str) -> str | None:
    """Return the user a token belongs to, or None if it is not valid."""
    if client is None:
        logger.warning("Token review requested without a Kubernetes client")
        return None
    try:
        return await client.review_token(token)
    except OCMClientError as e:
        logger.warning("Token review failed", error=str(e))
        return None


async def _accept_token(request: Request, token: str) -> str:
    user = await validate_token(request.app.state.ocm_client, token)
    if user is None:
        logger.info("Token rejected", token_prefix=token[:10])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_MESSAGE,
        )

    user_var.set(user)
    logger.debug("Token accepted", user=user)
    return user


def _bearer_token(header: str) -> str:
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_FORMAT_MESSAGE,
        )
    return parts[1]


async def require_user(request: Request) -> str:
    """Dependency that authenticates the request.

    Returns:
        The authenticated user name

    Raises:
        HTTPException: 401 when the header is missing or malformed, or the
            token is rejected
    """
    settings: Settings = request.app.state.settings
    if settings.dashboard.bypass_auth:
        return BYPASS_USER

    header = request.headers.get("Authorization")
    if not header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_HEADER_MESSAGE,
        )

    return await _accept_token(request, _bearer_token(header))


async def require_stream_user(
    request: Request,
    token: str | None = Query(default=None, description="Bearer token for EventSource clients"),
) -> str:
    """Dependency for the change stream.

    Same as ``require_user``, but a browser EventSource cannot set
    headers, so a ``token`` query parameter is accepted when no
    Authorization header is sent. The header wins when both are present.
    """
    settings: Settings = request.app.state.settings
    if settings.dashboard.bypass_auth:
        return BYPASS_USER

    header = request.headers.get("Authorization")
    if header:
        return await _accept_token(request, _bearer_token(header))
    if token:
        return await _accept_token(request, token)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=MISSING_HEADER_MESSAGE,
    )
