"""Request/response schemas for product endpoints."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductIn(BaseModel):
    """
    Body for creating or replacing a product.

    `category` is the category's name; it must already exist. `price` accepts
    a number or a numeric string and is normalized to two decimal places.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, examples=["Laptop"])
    description: str = Field(..., min_length=1, examples=["14-inch ultrabook."])
    category: str = Field(..., min_length=1, max_length=255, examples=["Electronics"])
    price: Decimal = Field(..., description="Price with two decimal places.", examples=["999.99"])


class ProductOut(BaseModel):
    """Product as returned by read endpoints; `category` is the category name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    category: str

    @field_validator("category", mode="before")
    @classmethod
    def category_name(cls, v: Any) -> Any:
        return getattr(v, "name", v)
