# store_service/db/models.py
import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    ForeignKey,
    DateTime,
    Numeric,
    JSON,
    CheckConstraint,
    UniqueConstraint,
)

from store_service.db.database import Base

MONEY = Numeric(12, 2)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Accepted payment methods
class PaymentMethod(str, enum.Enum):
    BANK_SLIP = "Boleto"
    CREDIT_CARD = "Cartão de Crédito"
    BITCOIN = "Bitcoin"
    PIX = "Pix"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # salted hash
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=True)
    description = Column(String, nullable=True)
    funds = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    version_id = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("funds >= 0", name="ck_users_funds_non_negative"),)
    __mapper_args__ = {"version_id_col": version_id}


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), index=True, nullable=False)
    name = Column(String, index=True, nullable=False)
    brand = Column(String, nullable=True)
    description = Column(String, nullable=True)
    price = Column(MONEY, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)  # stock available
    sales = Column(Integer, nullable=False, default=0)
    on_sale = Column(Boolean, nullable=False, default=False)
    discount = Column(Integer, nullable=False, default=0)  # percent
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    version_id = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),)
    __mapper_args__ = {"version_id_col": version_id}


# Shopping cart line; seller and price are copied from the product when added
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    seller_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    price = Column(MONEY, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),)


# Purchase record, never updated; buyer_id is kept without a foreign key
class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    buyer_id = Column(Integer, index=True, nullable=False)
    products = Column(JSON, nullable=False, default=list)
    payment_method = Column(String, nullable=False)
    total_price = Column(MONEY, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class WishlistCollection(Base):
    __tablename__ = "wishlist_collections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    privated = Column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_wishlist_collections_user_name"),)


class WishlistItem(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    group_id = Column(Integer, ForeignKey("wishlist_collections.id"), index=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "group_id", name="uq_wishlist_items_user_product_group"),
    )


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    product_owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    score = Column(Integer, nullable=False)
    text = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
