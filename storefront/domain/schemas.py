# storefront/domain/schemas.py
import math
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def coerce_qty(value: Any) -> int:
    """Ilosc zawsze >= 1, niepoprawna wartosc -> 1."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    return max(1, int(number))


Qty = Annotated[int, BeforeValidator(coerce_qty)]


class ApiModel(BaseModel):
    """snake_case w Pythonie, camelCase w JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class OkOut(ApiModel):
    ok: bool = True


class HealthOut(ApiModel):
    status: str
    time: datetime


# ---------- products ----------

class ProductOut(ApiModel):
    id: int
    slug: str
    name: str
    price: Decimal
    category: str
    img: str
    description: str
    stock: int
    created_at: datetime
    updated_at: datetime


class ProductCreateIn(ApiModel):
    slug: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Decimal("0")
    category: str = ""
    img: str = ""
    description: str = ""
    stock: int = 0


class ProductUpdateIn(ApiModel):
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = None
    category: Optional[str] = None
    img: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = None


class ProductPage(ApiModel):
    items: List[ProductOut]
    total: int
    skip: int
    take: int


# ---------- cart ----------

class CartItemIn(ApiModel):
    product_id: int
    qty: Qty = 1


class CartItemOut(ApiModel):
    id: int
    cart_id: int
    product_id: int
    qty: int
    product: ProductOut


class CartOut(ApiModel):
    id: int
    user_id: int
    status: str
    created_at: datetime
    items: List[CartItemOut]


# ---------- checkout ----------

class CheckoutLineIn(ApiModel):
    slug: str
    qty: Qty = 1


class CheckoutIn(ApiModel):
    items: List[CheckoutLineIn] = []


class CheckoutOut(ApiModel):
    success: bool = True
    order_id: int


# ---------- users ----------

class UserOut(ApiModel):
    id: int
    email: str
    name: Optional[str] = None
    admin: bool


class UserEnvelope(ApiModel):
    user: UserOut


class RegisterIn(ApiModel):
    name: Optional[str] = Field(None, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginIn(ApiModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdateIn(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AdminUserOut(UserOut):
    created_at: datetime


class UserPage(ApiModel):
    items: List[AdminUserOut]
    total: int
    skip: int
    take: int


class AdminUserUpdateIn(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    admin: Optional[bool] = None


class ResetPasswordIn(ApiModel):
    new_password: Optional[str] = None


# ---------- sales ----------

class SaleUserOut(ApiModel):
    id: int
    email: str
    name: Optional[str] = None


class SaleProductOut(ApiModel):
    id: int
    slug: str
    name: str
    price: Decimal


class SaleItemOut(ApiModel):
    id: int
    sale_id: int
    product_id: int
    qty: int
    price: Decimal
    product: SaleProductOut


class SaleOut(ApiModel):
    id: int
    user_id: int
    total: Decimal
    created_at: datetime
    user: SaleUserOut
    items: List[SaleItemOut]


class SalePage(ApiModel):
    items: List[SaleOut]
    total: int
    skip: int
    take: int


class StatsBucketOut(ApiModel):
    month: str
    year: int
    sales: Decimal


# ---------- reviews ----------

class ReviewIn(ApiModel):
    name: Optional[str] = Field(None, max_length=255)
    text: str = Field(..., min_length=1)
    stars: int
    product_id: Optional[int] = None


class ReviewUpdateIn(ApiModel):
    name: Optional[str] = Field(None, max_length=255)
    text: Optional[str] = Field(None, min_length=1)
    stars: Optional[int] = None
    published: Optional[bool] = None


class ReviewOut(ApiModel):
    id: int
    name: Optional[str] = None
    text: str
    stars: int
    published: bool
    user_id: Optional[int] = None
    product_id: Optional[int] = None
    created_at: datetime


# ---------- faq ----------

class FaqIn(ApiModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    ordering: int = 0
    published: bool = True


class FaqUpdateIn(ApiModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    ordering: Optional[int] = None
    published: Optional[bool] = None


class FaqOut(ApiModel):
    id: int
    question: str
    answer: str
    ordering: int
    published: bool
    created_at: datetime


# ---------- portfolio ----------

class PortfolioOut(ApiModel):
    slug: str
    name: str
    image_url: str
    description: str
    tags: List[str]


# ---------- identity ----------

class Identity(BaseModel):
    """Claimy z zdekodowanego tokenu."""

    id: int
    email: str
    admin: bool = False
