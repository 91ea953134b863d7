# store_service/validators.py
"""
Input validators.

Each check is a pure function: it looks only at its arguments and returns a
ValidationOutcome listing what is wrong. Services decide what to do with it.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Tuple

from store_service.db.models import PaymentMethod
from store_service.errors import ValidationError

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PASSWORD_MIN_LENGTH = 8
FIRST_NAME_MAX_LENGTH = 10
LAST_NAME_MAX_LENGTH = 10
USER_DESCRIPTION_MAX_LENGTH = 250

PRODUCT_NAME_MAX_LENGTH = 30
PRODUCT_BRAND_MAX_LENGTH = 15
PRODUCT_DESCRIPTION_MAX_LENGTH = 200
PRODUCT_MAX_PRICE = Decimal("10000")
PRODUCT_MAX_QUANTITY = 3000

REVIEW_TEXT_MAX_LENGTH = 150
COLLECTION_NAME_MAX_LENGTH = 40


@dataclass(frozen=True)
class ValidationOutcome:
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return " ".join(self.errors)

    def __add__(self, other: "ValidationOutcome") -> "ValidationOutcome":
        return ValidationOutcome(self.errors + other.errors)

    def raise_if_invalid(self, code: str = None) -> None:
        if self.errors:
            raise ValidationError(self.message, code=code)


VALID = ValidationOutcome()


def _fail(message: str) -> ValidationOutcome:
    return ValidationOutcome((message,))


def _as_decimal(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Users

def validate_email(email) -> ValidationOutcome:
    if not isinstance(email, str) or not EMAIL_REGEX.match(email):
        return _fail("Invalid email field.")
    return VALID


def validate_password(password) -> ValidationOutcome:
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        return _fail("Invalid password field.")
    return VALID


def validate_name(first_name, last_name) -> ValidationOutcome:
    if not isinstance(first_name, str) or not first_name.strip() or len(first_name) > FIRST_NAME_MAX_LENGTH:
        return _fail("Invalid first name field.")
    if last_name is not None and (not isinstance(last_name, str) or len(last_name) > LAST_NAME_MAX_LENGTH):
        return _fail("Invalid last name field.")
    return VALID


def validate_user_description(description) -> ValidationOutcome:
    if description is not None and (
        not isinstance(description, str) or len(description) > USER_DESCRIPTION_MAX_LENGTH
    ):
        return _fail("Invalid description field.")
    return VALID


def check_registration(email, password, first_name, last_name=None, description=None) -> ValidationOutcome:
    return (
        validate_email(email)
        + validate_password(password)
        + validate_name(first_name, last_name)
        + validate_user_description(description)
    )


def check_login(email, password) -> ValidationOutcome:
    return validate_email(email) + validate_password(password)


def check_password_change(new_password) -> ValidationOutcome:
    return validate_password(new_password)


def check_email_change(email) -> ValidationOutcome:
    return validate_email(email)


def check_profile(first_name, last_name=None, description=None) -> ValidationOutcome:
    return validate_name(first_name, last_name) + validate_user_description(description)


def check_fund_amount(amount) -> ValidationOutcome:
    value = _as_decimal(amount)
    if value is None or not value.is_finite() or value <= 0:
        return _fail("Invalid amount.")
    return VALID


# Products

def check_product(name, price, quantity, brand=None, description=None, discount=0) -> ValidationOutcome:
    outcome = VALID
    if not isinstance(name, str) or not name.strip() or len(name) > PRODUCT_NAME_MAX_LENGTH:
        outcome += _fail("Invalid name field.")
    value = _as_decimal(price)
    if value is None or not value.is_finite() or value <= 0 or value > PRODUCT_MAX_PRICE:
        outcome += _fail("Invalid price field.")
    if not _is_int(quantity) or quantity < 0 or quantity > PRODUCT_MAX_QUANTITY:
        outcome += _fail("Invalid quantity field.")
    if brand is not None and (not isinstance(brand, str) or len(brand) > PRODUCT_BRAND_MAX_LENGTH):
        outcome += _fail("Invalid brand field.")
    if description is not None and (
        not isinstance(description, str) or len(description) > PRODUCT_DESCRIPTION_MAX_LENGTH
    ):
        outcome += _fail("Invalid description field.")
    if not _is_int(discount) or discount < 0 or discount > 100:
        outcome += _fail("Invalid discount field.")
    return outcome


def check_cart_item(quantity) -> ValidationOutcome:
    if not _is_int(quantity) or quantity < 1:
        return _fail("Invalid quantity field.")
    return VALID


# Reviews

def check_review(score, text) -> ValidationOutcome:
    outcome = VALID
    if not _is_int(score) or score < 0 or score > 5:
        outcome += _fail("Invalid score field.")
    if not isinstance(text, str) or len(text) > REVIEW_TEXT_MAX_LENGTH:
        outcome += _fail("Invalid text field.")
    return outcome


# Wishlist collections

def check_collection(name, privated) -> ValidationOutcome:
    outcome = VALID
    if not isinstance(name, str) or not name.strip() or len(name) > COLLECTION_NAME_MAX_LENGTH:
        outcome += _fail("Invalid name field.")
    if not isinstance(privated, bool):
        outcome += _fail("Invalid visibility field.")
    return outcome


# Transactions

def check_payment_method(payment_method) -> ValidationOutcome:
    if not isinstance(payment_method, str) or not payment_method:
        return _fail("Invalid payment method.")
    if payment_method not in {method.value for method in PaymentMethod}:
        return _fail("Invalid payment method.")
    return VALID
