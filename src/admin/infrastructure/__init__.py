"""
Admin Infrastructure Layer
==========================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
- Security: bcrypt password hashing and JWT access tokens
"""

from src.admin.infrastructure.models import AdminUserModel
from src.admin.infrastructure.repositories import SQLAlchemyAdminUserRepository
from src.admin.infrastructure.security import BcryptPasswordHasher, JWTTokenService

__all__ = [
    "AdminUserModel",
    "SQLAlchemyAdminUserRepository",
    "BcryptPasswordHasher",
    "JWTTokenService",
]
