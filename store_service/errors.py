# store_service/errors.py
import re
from typing import Any, Dict, Optional

_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class StoreError(Exception):
    """Base typed error of the store service.

    `code` is stable and machine-checkable, `message` is safe to show to the
    caller and `status_code` is the HTTP status the error maps to.
    """

    status_code = 500
    default_code = "internal.error"
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None):
        code = code or self.default_code
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(f"Invalid error code: {code!r}")
        self.code = code
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_public_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class ValidationError(StoreError):
    status_code = 400
    default_code = "request.invalid"
    default_message = "Invalid data"


class NotFoundError(StoreError):
    status_code = 404
    default_code = "resource.not_found"
    default_message = "Not found"


class NotAuthorizedError(StoreError):
    status_code = 401
    default_code = "auth.not_authorized"
    default_message = "Not authorized"


class ConflictError(StoreError):
    status_code = 400
    default_code = "request.conflict"
    default_message = "Operation not allowed"


class TransientStoreError(StoreError):
    status_code = 503
    default_code = "store.transient"
    default_message = "The operation could not be completed, please try again"
