# app/repositories/product_repo.py
import uuid
from decimal import Decimal

from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Read-only data access for the storefront catalog.

    - Pure DB operations (queries).
    - No FastAPI, no business logic.
    - Writes happen only through the sheet sync (product_sync_repo).
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def list_in_stock(
        self,
        session: Session,
        brand: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        min_inclusive: bool = True,
        max_inclusive: bool = True,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Product]:
        stmt = select(Product).where(Product.stock > 0)
        if brand is not None:
            stmt = stmt.where(Product.brand == brand)
        if min_price is not None:
            stmt = stmt.where(
                Product.price >= min_price if min_inclusive else Product.price > min_price
            )
        if max_price is not None:
            stmt = stmt.where(
                Product.price <= max_price if max_inclusive else Product.price < max_price
            )
        stmt = stmt.order_by(Product.name).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_brands(self, session: Session) -> list[str]:
        stmt = (
            select(Product.brand)
            .where(Product.stock > 0, Product.brand.is_not(None))
            .distinct()
            .order_by(Product.brand)
        )
        return list(session.exec(stmt).all())
