# app/routers/products.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.product import PriceRange, ProductRead
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    brand: str | None = None,
    price_range: PriceRange | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    """
    List in-stock products, ordered by name.

    - `brand`: exact brand match.
    - `price_range`: under-50000 | 50000-150000 | over-150000
    """
    return service.list_products(
        session, brand=brand, price_range=price_range, skip=skip, limit=limit
    )


@router.get("/brands", response_model=list[str])
def list_brands(session: Session = Depends(get_session)):
    """
    Distinct brands of in-stock products (for the brand filter).
    """
    return service.list_brands(session)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    return service.get_product(session, product_id)
