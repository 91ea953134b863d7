# store_service/auth_utils.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from store_service import config
from store_service.errors import NotAuthorizedError


class PasswordHasher:
    """Salted PBKDF2-SHA256 password hashes stored as `salt$hash`."""

    def __init__(self, iterations: int = 120_000):
        self.iterations = iterations

    def _digest(self, password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), self.iterations).hex()

    def hash_password(self, password: str) -> str:
        salt = secrets.token_hex(16)
        return f"{salt}${self._digest(password, salt)}"

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        salt, _, expected = hashed_password.partition("$")
        if not expected:
            return False
        return hmac.compare_digest(self._digest(plain_password, salt), expected)


class TokenService:
    """Issues and reads signed access tokens carrying the user id."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_access_token(self, user_id: int, email: str = None) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        payload = {"id": user_id, "exp": expire}
        if email:
            payload["sub"] = email
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise NotAuthorizedError("Token has expired", code="auth.token_expired")
        except jwt.InvalidTokenError:
            raise NotAuthorizedError("Invalid token", code="auth.invalid_token")
        user_id = payload.get("id")
        if not isinstance(user_id, int):
            raise NotAuthorizedError("Invalid token", code="auth.invalid_token")
        return user_id


def default_token_service() -> TokenService:
    return TokenService(config.SECRET_KEY, config.ALGORITHM, config.ACCESS_TOKEN_EXPIRE_MINUTES)
