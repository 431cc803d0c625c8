# app/services/product_service.py
import uuid
from decimal import Decimal

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.product import PriceRange


# Storefront price bands (rubles), as offered in the catalog filter.
# value -> (min, max, min_inclusive, max_inclusive)
PRICE_RANGES: dict[str, tuple[Decimal | None, Decimal | None, bool, bool]] = {
    "under-50000": (None, Decimal("50000"), True, False),
    "50000-150000": (Decimal("50000"), Decimal("150000"), True, True),
    "over-150000": (Decimal("150000"), None, False, True),
}


class ProductService:
    """
    Catalog queries for the storefront.

    Responsibilities:
      - only in-stock products are ever listed
      - brand / price band filters
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(
        self,
        session: Session,
        brand: str | None = None,
        price_range: PriceRange | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Product]:
        """
        In-stock products ordered by name.

        A price band excludes products without a price.
        """
        min_price = max_price = None
        min_inclusive = max_inclusive = True
        if price_range is not None:
            min_price, max_price, min_inclusive, max_inclusive = PRICE_RANGES[price_range]

        return self.repo.list_in_stock(
            session,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
            min_inclusive=min_inclusive,
            max_inclusive=max_inclusive,
            skip=skip,
            limit=limit,
        )

    def list_brands(self, session: Session) -> list[str]:
        return self.repo.list_brands(session)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product
