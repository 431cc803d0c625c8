# app/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal
from urllib.parse import urlsplit

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


PriceRange = Literal["under-50000", "50000-150000", "over-150000"]


def is_absolute_url(value: str) -> bool:
    """True for http(s) URLs with a host, e.g. https://cdn.example.com/a.jpg"""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class ProductRow(SQLModel):
    """
    One normalized sheet row, ready to be inserted into `products`.

    Only rows with a name and stock > 0 ever become a ProductRow.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    brand: str | None = None
    stock: int = Field(gt=0)
    price: Decimal | None = Field(default=None, ge=0)
    image_url_1: str | None = None
    image_url_2: str | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("image_url_1", "image_url_2")
    @classmethod
    def absolute_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not is_absolute_url(v):
            raise ValueError("image URL must be an absolute http(s) URL")
        return v


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    brand: str | None = None
    price: Decimal | None = None
    stock: int
    image_url_1: str | None = None
    image_url_2: str | None = None
    created_at: datetime
    updated_at: datetime
