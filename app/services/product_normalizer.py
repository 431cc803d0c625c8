# app/services/product_normalizer.py
"""
Sheet row -> ProductRow mapping.

Column layout (zero-indexed):
  0 A name | 1 B brand | 4 E stock | 5 F price | 6 G image 1 | 7 H image 2
Columns C, D, I and J are not used.

Bad cells never fail the sync: they fall back to None / 0 and the row
is kept or dropped according to the name + stock rule.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from app.core.sheets_client import HyperlinkOverlay
from app.schemas.product import ProductRow, is_absolute_url

logger = logging.getLogger(__name__)

NAME_COL = 0
BRAND_COL = 1
STOCK_COL = 4
PRICE_COL = 5
IMAGE_1_COL = 6
IMAGE_2_COL = 7

# Ruble sign and its abbreviations, e.g. "₽27,000.00", "1 200 руб.", "RUB 900", "Р 1 200"
_CURRENCY_RE = re.compile(r"₽|руб\.?|rub|р\.?", re.IGNORECASE)
# numeric(12, 2): at most 10 integer digits
_MAX_PRICE = Decimal("10000000000")
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
# URL embedded in text such as =HYPERLINK("https://...", "Photo")
_EMBEDDED_URL_RE = re.compile(r"(https?://[^\s\"')]+)")


def _cell(row: Sequence[Any], index: int) -> Any:
    # values.get drops trailing empty cells, so rows can be short
    return row[index] if index < len(row) else None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def parse_stock(value: Any) -> int:
    """
    Leading-integer parse: "5" -> 5, "12 pcs" -> 12, "5.9" -> 5.
    Anything else -> 0.
    """
    if _is_number(value):
        try:
            return int(value)
        except (ValueError, OverflowError, InvalidOperation):
            return 0

    if not isinstance(value, str):
        return 0

    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0


def parse_price(value: Any) -> Decimal | None:
    """
    Parse a price cell.

    "₽27,000.00" -> Decimal("27000.00"), "27000" -> Decimal("27000").
    Empty, unparsable, non-finite, negative or too large for the
    price column -> None.
    """
    if value is None or isinstance(value, bool):
        return None

    if _is_number(value):
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            return None
    else:
        cleaned = _CURRENCY_RE.sub("", str(value))
        cleaned = _WHITESPACE_RE.sub("", cleaned).replace(",", "")
        match = _LEADING_DECIMAL_RE.match(cleaned)
        if not match:
            return None
        price = Decimal(match.group(0))

    if not price.is_finite() or price < 0 or price >= _MAX_PRICE:
        return None
    return price


def resolve_image_url(
    row_index: int,
    col_index: int,
    value: Any,
    hyperlinks: HyperlinkOverlay,
) -> str | None:
    """
    Pick the image URL for one cell.

    Order:
      1. hyperlink attached to the cell (the real link target)
      2. cell text that already is an http(s) URL
      3. first http(s) URL found inside the cell text
    """
    link = _text(hyperlinks.get((row_index, col_index)))
    if link and is_absolute_url(link):
        return link

    text = _text(value)
    if text is None:
        return None

    if text.startswith(("http://", "https://")) and is_absolute_url(text):
        return text

    match = _EMBEDDED_URL_RE.search(text)
    if match and is_absolute_url(match.group(1)):
        return match.group(1)

    return None


def normalize_row(
    row_index: int,
    row: Sequence[Any],
    hyperlinks: HyperlinkOverlay | None = None,
) -> ProductRow | None:
    """
    Map one raw row, or return None if it has no name or no stock.
    """
    hyperlinks = hyperlinks or {}

    name = _text(_cell(row, NAME_COL))
    stock = parse_stock(_cell(row, STOCK_COL))
    if not name or stock <= 0:
        return None

    return ProductRow(
        name=name,
        brand=_text(_cell(row, BRAND_COL)),
        stock=stock,
        price=parse_price(_cell(row, PRICE_COL)),
        image_url_1=resolve_image_url(
            row_index, IMAGE_1_COL, _cell(row, IMAGE_1_COL), hyperlinks
        ),
        image_url_2=resolve_image_url(
            row_index, IMAGE_2_COL, _cell(row, IMAGE_2_COL), hyperlinks
        ),
    )


def normalize_rows(
    rows: Sequence[Sequence[Any]],
    hyperlinks: HyperlinkOverlay | None = None,
) -> list[ProductRow]:
    """
    Normalize all rows, keeping sheet order and dropping rejected rows.

    `rows[i]` must line up with hyperlink row index `i`.
    """
    logger.info("🔄 Processing products...")

    products: list[ProductRow] = []
    for row_index, row in enumerate(rows):
        product = normalize_row(row_index, row, hyperlinks)
        if product is not None:
            products.append(product)

    logger.info(f"   Filtered to {len(products)} products with stock > 0 (of {len(rows)} rows)")

    if products:
        sample = products[0]
        logger.debug(
            "   Sample parsed product: name=%r brand=%r stock=%s price=%s image_1=%s image_2=%s",
            sample.name,
            sample.brand,
            sample.stock,
            sample.price,
            sample.image_url_1,
            sample.image_url_2,
        )

    return products
