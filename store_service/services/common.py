# store_service/services/common.py
import structlog

from store_service.errors import NotAuthorizedError, NotFoundError

logger = structlog.get_logger()


def require(instance, message: str, code: str = "resource.not_found"):
    """Return `instance` or raise NotFoundError when it is missing."""
    if instance is None:
        raise NotFoundError(message, code=code)
    return instance


def ensure_same_user(caller_id: int, owner_id: int, action: str) -> None:
    if caller_id is None or caller_id != owner_id:
        logger.info("authorization.refused", action=action, caller_id=caller_id, owner_id=owner_id)
        raise NotAuthorizedError("Not authorized.")
