"""Pydantic payloads: field validation for writes and read models for the API."""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from storefront.core.errors import ValidationError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
_CENTS = Decimal("0.01")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def to_money(value: Any) -> Any:
    """Round numeric input half-up to 2 fractional digits (decimal(n, 2) columns)."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float, str, Decimal)):
        try:
            return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return value  # let pydantic report the bad value
    return value


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


def validate_payload(schema: type[SchemaT], data: Any) -> SchemaT:
    """Coerce a mapping (or pass through a schema instance), raising our ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(f"{field or 'payload'}: {first['msg']}", field=field) from exc


# --- Customers ---


class CustomerCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=255)
    birth_date: Optional[date] = None
    is_premium: bool = False


class CustomerUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=255)
    birth_date: Optional[date] = None
    is_premium: Optional[bool] = None

    @field_validator("first_name", "last_name", "email", "is_premium", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    is_premium: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Categories ---


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


# --- Products ---


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str
    image_url: Optional[str] = Field(default=None, max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    weight: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    is_active: bool = True
    category_id: int

    @field_validator("price", "weight", mode="before")
    @classmethod
    def round_money(cls, value):
        return to_money(value)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=255)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    weight: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    stock: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    category_id: Optional[int] = None

    @field_validator("price", "weight", mode="before")
    @classmethod
    def round_money(cls, value):
        return to_money(value)

    @field_validator("name", "description", "price", "stock", "is_active", "category_id", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    image_url: Optional[str] = None
    price: Decimal
    weight: Optional[Decimal] = None
    stock: int
    is_active: bool
    category_id: int


# --- Reviews ---


class ReviewUpsert(BaseModel):
    product_id: int
    customer_id: int
    rating: StrictInt
    comment: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    is_verified_purchase: Optional[bool] = None


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    customer_id: int
    rating: int
    comment: Optional[str] = None
    is_verified_purchase: bool
    reviewed_at: datetime


class RatingSummaryOut(BaseModel):
    product_id: int
    average_rating: Optional[float] = None
    review_count: int
