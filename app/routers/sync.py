# app/routers/sync.py
import logging

from fastapi import APIRouter, Depends, status

from app.core.auth import require_sync_secret
from app.core.config import Settings, get_settings
from app.core.errors import SyncEndpointError, SyncError
from app.schemas.sync import SyncErrorResponse, SyncResponse
from app.services.sync_service import ProductSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sync", tags=["Sync"])


def get_sync_service(settings: Settings = Depends(get_settings)) -> ProductSyncService:
    """
    Dependency building the sync pipeline.

    Nothing touches Google / Supabase until `run()` is called.
    """
    return ProductSyncService(settings)


@router.post(
    "",
    response_model=SyncResponse,
    responses={
        401: {"model": SyncErrorResponse},
        500: {"model": SyncErrorResponse},
    },
    dependencies=[Depends(require_sync_secret)],
    summary="Replace all products with the contents of the Google Sheet",
)
def sync_products(
    service: ProductSyncService = Depends(get_sync_service),
):
    """
    Run the sheet -> database sync (bearer token required).

    - 200: {"success": true, "count": <inserted products>}
    - 401: missing / wrong token, nothing is touched
    - 500: configuration or pipeline failure
    """
    try:
        result = service.run()
    except SyncError as exc:
        raise SyncEndpointError(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message) from exc
    except Exception as exc:
        logger.exception("❌ Sync failed with an unexpected error")
        raise SyncEndpointError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Unknown error"
        ) from exc

    return SyncResponse(count=result.count)
