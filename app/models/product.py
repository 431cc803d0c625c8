# app/models/product.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Catalog entry, fully rewritten by every sheet sync.

    Rows reach this table through the Supabase REST API (sync) without
    id / timestamps, so those carry server defaults as well.
    See sql/products.sql for the provisioning DDL.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"server_default": func.gen_random_uuid()},
    )

    name: str = Field(
        min_length=1,
        index=True,
        description="Display name (sheet column A)",
    )

    brand: str | None = Field(
        default=None,
        index=True,
        description="Brand / maker (sheet column B)",
    )

    price: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Unit price in rubles (sheet column F)",
    )

    stock: int = Field(
        gt=0,
        index=True,
        description="Units in stock (sheet column E); always > 0",
    )

    image_url_1: str | None = Field(
        default=None,
        description="Primary image URL (sheet column G)",
    )

    image_url_2: str | None = Field(
        default=None,
        description="Secondary image URL (sheet column H)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"server_default": func.now()},
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"server_default": func.now(), "onupdate": func.now()},
        description="Last update timestamp (UTC)",
    )
