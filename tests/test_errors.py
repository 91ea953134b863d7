import pytest

from store_service.errors import (
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    StoreError,
    TransientStoreError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_class, status, code",
    [
        (ValidationError, 400, "request.invalid"),
        (NotFoundError, 404, "resource.not_found"),
        (NotAuthorizedError, 401, "auth.not_authorized"),
        (ConflictError, 400, "request.conflict"),
        (TransientStoreError, 503, "store.transient"),
    ],
)
def test_defaults(error_class, status, code):
    error = error_class()
    assert isinstance(error, StoreError)
    assert error.status_code == status
    assert error.to_public_dict() == {"detail": error_class.default_message, "code": code}


def test_custom_message_and_code():
    error = ConflictError("Insufficient funds.", code="funds.insufficient")
    assert str(error) == "Insufficient funds."
    assert error.to_public_dict() == {"detail": "Insufficient funds.", "code": "funds.insufficient"}


def test_malformed_code_is_refused():
    with pytest.raises(ValueError):
        NotFoundError("x", code="Not Found")
