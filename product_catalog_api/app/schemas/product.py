"""
Pydantic models for product data.

These schemas define the structure of product records exchanged via
the API.  ``ProductBase`` holds the shared fields; ``ProductCreate``
is the body of ``POST /products`` (the store assigns the id) and
``ProductRead`` is both the response shape and the full‑replace body
of ``PUT /products/{id}``.

``ProductQueryParameters`` is the per‑request descriptor of the
filter, sort and pagination options accepted by ``GET /products``.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

SORT_ORDERS = {"asc", "desc"}


class ProductBase(BaseModel):
    sku: str = Field(..., min_length=1, examples=["AWMGSJ"])
    name: str = Field(..., min_length=1, examples=["Men's Gym Shorts"])
    description: str = Field("", examples=["Lightweight shorts with a mesh liner."])
    # 15 significant digits is what a REAL column stores exactly.
    price: Decimal = Field(..., max_digits=15, decimal_places=2, examples=[29.99])
    is_available: bool = Field(False, examples=[True])

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class ProductCreate(ProductBase):
    """Schema for creating a product."""
    pass


class ProductRead(ProductBase):
    """Schema for a stored product, including its identifier."""

    id: int


class ProductQueryParameters(BaseModel):
    """Filter, sort and pagination options for listing products.

    All filters are optional and combined with logical AND.  ``size``
    is clamped to the configured maximum by the parser, and an
    unrecognised ``sort_order`` falls back to ascending.  A blank
    ``sort_by`` means the default ``id`` ordering.
    """

    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search_term: Optional[str] = None
    sku: Optional[str] = None
    name: Optional[str] = None
    sort_by: str = "id"
    sort_order: str = "asc"
    page: int = Field(1, ge=1)
    size: int = Field(50, gt=0)

    @field_validator("sort_by", mode="before")
    @classmethod
    def default_blank_sort_by(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "id"
        return value

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalise_sort_order(cls, value):
        if isinstance(value, str) and value.lower() in SORT_ORDERS:
            return value.lower()
        return "asc"

    @property
    def offset(self) -> int:
        return self.size * (self.page - 1)
