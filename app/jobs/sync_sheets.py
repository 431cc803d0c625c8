# app/jobs/sync_sheets.py
"""
Run the Google Sheets -> Supabase product sync once.

    python -m app.jobs.sync_sheets
    sync-sheets            (console script)

Configuration comes from the environment / .env / .env.local.
Exit code 0 on success, 1 on any failure.
"""

import logging
import sys

from app.core.config import Settings, get_settings
from app.core.errors import SyncError
from app.core.logging_conf import configure_logging
from app.services.sync_service import ProductSyncService

logger = logging.getLogger("app.jobs.sync_sheets")


def run(settings: Settings | None = None, service: ProductSyncService | None = None) -> int:
    """
    Run the sync and translate the outcome into a process exit code.
    """
    settings = settings or get_settings()
    service = service or ProductSyncService(settings)

    try:
        result = service.run()
    except SyncError as exc:
        logger.error(f"❌ Sync failed: {exc.message}")
        return 1
    except Exception:
        logger.exception("❌ Sync failed with an unexpected error")
        return 1

    logger.info(f"✅ {result.count} products in catalog")
    return 0


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    sys.exit(run(settings))


if __name__ == "__main__":
    main()
