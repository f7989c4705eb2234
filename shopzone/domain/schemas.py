# shopzone/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------- users / auth

class RegisterIn(BaseModel):
    """Schema for registering a new account."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=255)
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    phone: str | None = Field(None, max_length=32)


class LoginIn(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    token: str
    user: UserRead


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=32)


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., max_length=255)


# ---------------------------------------------------------------- products

class ProductCreate(BaseModel):
    """Schema for creating a product (admin)."""

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: Decimal
    category: str = Field(..., max_length=100)
    image: str | None = Field(None, max_length=500)
    images: List[str] | None = None
    stock: int = 0


class ProductUpdate(BaseModel):
    """Partial product update; only fields present in the request are applied."""

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: Decimal | None = None
    category: str | None = Field(None, max_length=100)
    image: str | None = Field(None, max_length=500)
    images: List[str] | None = None
    stock: int | None = None


class ProductOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    category: str
    image: str | None = None
    images: List[str] | None = None
    stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- cart

class CartItemIn(BaseModel):
    product_id: str
    quantity: int = Field(1, description="Units to add (must be > 0)")


class CartQuantityIn(BaseModel):
    quantity: int = Field(..., description="New quantity; 0 or less removes the item")


class CartItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    product: ProductOut
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    items: List[CartLineOut]
    item_count: int
    subtotal: Decimal


# ---------------------------------------------------------------- orders

class OrderCreate(BaseModel):
    """Checkout input. Both fields are stored as given; no payment is taken."""

    shipping_address: str | dict[str, Any]
    payment_method: str = Field(..., min_length=1, max_length=255)


class OrderStatusIn(BaseModel):
    status: str


class OrderItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: Decimal
    product_snapshot: dict[str, Any]

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: str
    user_id: str
    status: str
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    currency: str
    shipping_address: str | dict[str, Any]
    payment_method: str
    items: List[OrderItemOut]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- addresses

class AddressIn(BaseModel):
    label: str = Field(..., max_length=50)
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    company: str | None = Field(None, max_length=100)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=32)
    is_default: bool = False


class AddressUpdate(BaseModel):
    label: str | None = Field(None, max_length=50)
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=32)
    is_default: bool | None = None


class AddressOut(BaseModel):
    id: str
    user_id: str
    label: str
    first_name: str
    last_name: str
    company: str | None = None
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: str | None = None
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
