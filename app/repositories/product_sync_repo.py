# app/repositories/product_sync_repo.py
import logging
from typing import Sequence

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.errors import DatabaseWriteError
from app.schemas.product import ProductRow

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"

# Keeps each insert request well under PostgREST payload limits
INSERT_BATCH_SIZE = 100


def _api_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


class ProductSyncRepository:
    """
    Replace-all writes to `products` through the Supabase REST API.

    - Uses the service-role client (bypasses RLS).
    - Not transactional: between delete and the last insert the table
      is partially or fully empty.
    """

    def __init__(
        self,
        client: Client,
        table: str = PRODUCTS_TABLE,
        batch_size: int = INSERT_BATCH_SIZE,
    ):
        self.client = client
        self.table = table
        self.batch_size = batch_size

    def list_ids(self) -> list[str]:
        try:
            response = self.client.table(self.table).select("id").execute()
        except (APIError, httpx.HTTPError) as exc:
            raise DatabaseWriteError(f"Failed to fetch products: {_api_message(exc)}") from exc
        return [row["id"] for row in response.data or []]

    def delete_all(self) -> int:
        """
        Delete every existing product. Returns how many were removed.
        """
        logger.info("🗑️  Deleting all existing products...")

        ids = self.list_ids()
        if not ids:
            logger.info("   ℹ️  No products to delete")
            return 0

        logger.info(f"   Found {len(ids)} products to delete")
        try:
            self.client.table(self.table).delete().in_("id", ids).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise DatabaseWriteError(f"Failed to delete products: {_api_message(exc)}") from exc

        logger.info("   ✅ All products deleted")
        return len(ids)

    def insert_products(self, products: Sequence[ProductRow]) -> int:
        """
        Insert products in batches of `batch_size`, in order.

        Stops at the first failing batch (1-indexed in the error).
        """
        if not products:
            logger.info("⚠️  No products to insert")
            return 0

        logger.info(f"📦 Inserting {len(products)} products into Supabase...")

        total_batches = (len(products) + self.batch_size - 1) // self.batch_size
        inserted = 0
        for start in range(0, len(products), self.batch_size):
            batch_no = start // self.batch_size + 1
            batch = [p.model_dump(mode="json") for p in products[start : start + self.batch_size]]
            try:
                self.client.table(self.table).insert(batch).execute()
            except (APIError, httpx.HTTPError) as exc:
                logger.error(f"   ❌ Error details: {exc}")
                raise DatabaseWriteError(
                    f"Failed to insert products batch {batch_no}: {_api_message(exc)}"
                ) from exc

            inserted += len(batch)
            logger.info(f"   ✅ Inserted batch {batch_no}/{total_batches} ({len(batch)} products)")

        logger.info(f"   ✅ Successfully inserted {inserted} products")
        return inserted
