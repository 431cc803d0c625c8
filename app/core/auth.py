# app/core/auth.py
import logging
import secrets

from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import Settings, get_settings
from app.core.errors import SyncEndpointError

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise
#   FastAPI's default 403, so we can answer with our own 401 payload.
bearer_scheme = HTTPBearer(auto_error=False)


def require_sync_secret(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Guard for the sync endpoint: `Authorization: Bearer <SYNC_SECRET_KEY>`.

    Raises:
        SyncEndpointError(500): SYNC_SECRET_KEY is not configured.
        SyncEndpointError(401): header missing, not Bearer, or wrong token.
    """
    if not settings.SYNC_SECRET_KEY:
        logger.error("❌ SYNC_SECRET_KEY environment variable is not set")
        raise SyncEndpointError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server configuration error",
        )

    if credentials is None:
        logger.error("❌ Missing or invalid Authorization header")
        raise SyncEndpointError(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    if not secrets.compare_digest(
        credentials.credentials.encode("utf-8"),
        settings.SYNC_SECRET_KEY.encode("utf-8"),
    ):
        logger.error("❌ Invalid authorization token")
        raise SyncEndpointError(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
