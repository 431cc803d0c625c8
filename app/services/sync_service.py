# app/services/sync_service.py
import logging
from dataclasses import dataclass
from enum import Enum

from app.core.config import Settings
from app.core.errors import ConfigurationError, SyncError
from app.core.sheets_client import SheetsReader
from app.core.supabase_client import supabase_admin
from app.repositories.product_sync_repo import ProductSyncRepository
from app.services.product_normalizer import normalize_rows

logger = logging.getLogger(__name__)


class SyncStage(str, Enum):
    INIT = "init"
    CREDENTIALS_LOADED = "credentials-loaded"
    READ_COMPLETE = "read-complete"
    NORMALIZED = "normalized"
    DELETED = "deleted"
    INSERTED = "inserted"
    DONE = "done"


@dataclass
class SyncResult:
    count: int
    deleted: int = 0
    rows_read: int = 0
    hyperlinks: int = 0


class ProductSyncService:
    """
    Google Sheet -> Supabase `products`, replace-all.

    Linear pipeline, no retries and no rollback:
        init -> credentials-loaded -> read-complete -> normalized
             -> deleted -> inserted -> done

    If inserting fails after the delete went through, the table stays
    empty until the next successful run. Two overlapping runs are not
    serialized either.

    `reader` / `repo` can be injected (tests); otherwise they are built
    from settings when `run()` starts.
    """

    def __init__(
        self,
        settings: Settings,
        reader: SheetsReader | None = None,
        repo: ProductSyncRepository | None = None,
    ):
        self.settings = settings
        self.reader = reader
        self.repo = repo
        self.stage = SyncStage.INIT

    def _check_settings(self) -> None:
        required = []
        if self.reader is None:
            required.append("GOOGLE_SHEET_ID")
        if self.repo is None:
            required += ["SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"]

        for name in required:
            if not getattr(self.settings, name):
                raise ConfigurationError(f"{name} environment variable is required")

    def _advance(self, stage: SyncStage) -> None:
        self.stage = stage
        logger.debug(f"sync stage -> {stage.value}")

    def run(self) -> SyncResult:
        """
        Execute one full sync.

        Returns:
            SyncResult with the number of inserted products.

        Raises:
            SyncError (ConfigurationError / SheetsReadError /
            DatabaseWriteError) with `stage` set to the step that failed.
        """
        logger.info("🚀 Starting Google Sheets to Supabase sync...")
        self._advance(SyncStage.INIT)

        try:
            self._check_settings()
            repo = self.repo or ProductSyncRepository(supabase_admin(self.settings))

            reader = self.reader or SheetsReader.from_settings(self.settings)
            self._advance(SyncStage.CREDENTIALS_LOADED)

            sheet = reader.read()
            self._advance(SyncStage.READ_COMPLETE)

            products = normalize_rows(sheet.rows, sheet.hyperlinks)
            self._advance(SyncStage.NORMALIZED)

            deleted = repo.delete_all()
            self._advance(SyncStage.DELETED)

            inserted = repo.insert_products(products)
            self._advance(SyncStage.INSERTED)
        except SyncError as exc:
            if exc.stage is None:
                exc.stage = self.stage.value
            logger.error(f"❌ Sync failed after stage '{exc.stage}': {exc.message}")
            raise

        self._advance(SyncStage.DONE)
        logger.info("🎉 Sync completed successfully!")
        return SyncResult(
            count=inserted,
            deleted=deleted,
            rows_read=len(sheet.rows),
            hyperlinks=len(sheet.hyperlinks),
        )
