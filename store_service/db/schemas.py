# store_service/db/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


# Users
class UserRegister(BaseModel):
    email: str
    password: str
    first_name: str
    last_name: Optional[str] = None
    description: Optional[str] = None


class UserLogin(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    id: int
    email: str
    first_name: str
    funds: Decimal
    token: str


class UserUpdate(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    description: Optional[str] = None


class PasswordChange(BaseModel):
    password: str
    new_password: str


class EmailChange(BaseModel):
    email: str


class FundsAdd(BaseModel):
    amount: Decimal


class UserPublic(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserPrivate(BaseModel):
    id: int
    email: str
    funds: Decimal

    class Config:
        from_attributes = True


# Categories
class CategoryCreate(BaseModel):
    name: str


class CategorySchema(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# Products
class ProductBase(BaseModel):
    name: str
    price: Decimal
    quantity: int
    category_id: int
    brand: Optional[str] = None
    description: Optional[str] = None
    on_sale: bool = False
    discount: int = 0


class ProductSchema(ProductBase):
    id: int
    owner_id: int
    sales: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductCreated(BaseModel):
    message: str
    product_id: int


class ProductRating(BaseModel):
    average: Optional[float] = None
    score_metrics: Dict[int, int]


# Shopping cart
class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = 1


class CartItemSchema(BaseModel):
    id: int
    user_id: int
    seller_id: int
    product_id: int
    price: Decimal
    quantity: int

    class Config:
        from_attributes = True


# Reviews
class ReviewCreate(BaseModel):
    product_id: int
    score: int
    text: str = ""


class ReviewUpdate(BaseModel):
    score: int
    text: str = ""


class ReviewSchema(BaseModel):
    id: int
    author_id: int
    product_id: int
    product_owner_id: int
    score: int
    text: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Transactions
class TransactionCreate(BaseModel):
    payment_method: Optional[str] = None


class TransactionSchema(BaseModel):
    id: int
    buyer_id: int
    products: List[int]
    payment_method: str
    total_price: Decimal
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Wishlist
class CollectionCreate(BaseModel):
    name: str
    privated: bool = False


class CollectionSchema(BaseModel):
    id: int
    user_id: int
    name: str
    privated: bool

    class Config:
        from_attributes = True


class WishlistItemCreate(BaseModel):
    product_id: int
    group_id: int


class WishlistItemSchema(BaseModel):
    id: int
    user_id: int
    product_id: int
    group_id: int

    class Config:
        from_attributes = True
