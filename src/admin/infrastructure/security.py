"""
Admin Security
==============

Password hashing (bcrypt) and access tokens (JWT, via PyJWT).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from src.admin.application import IPasswordHasher, ITokenService
from src.admin.domain import AdminUser
from src.config import settings
from src.core import AuthenticationException


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt hashes with a per-password salt."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash, or a password over bcrypt's 72 byte limit
            return False


class JWTTokenService(ITokenService):
    """Signed, expiring bearer tokens for admin users."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None
    ):
        self._secret = secret or settings.jwt_secret
        self._algorithm = algorithm or settings.jwt_algorithm
        self._expire_minutes = expire_minutes or settings.access_token_expire_minutes

    @property
    def expires_in(self) -> int:
        return self._expire_minutes * 60

    def issue(self, user: AdminUser) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "agency_id": user.agency_id,
            "role": user.role,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationException("Token expired.")
        except jwt.InvalidTokenError:
            raise AuthenticationException("Invalid token.")
