"""
Admin Application Layer
=======================

Contains:
- Services: authentication and submission review
- Ports: user repository, password hasher, token service
- DTOs: Data transfer objects for API serialization
"""

from src.admin.application.dto import (
    LoginRequest,
    LoginResponse,
    AdminUserInfo,
    SubmissionReviewRequest,
    AdminSubmissionView,
)
from src.admin.application.services import (
    IAdminUserRepository,
    IPasswordHasher,
    ITokenService,
    AdminAuthService,
    AdminSubmissionService,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "AdminUserInfo",
    "SubmissionReviewRequest",
    "AdminSubmissionView",
    "IAdminUserRepository",
    "IPasswordHasher",
    "ITokenService",
    "AdminAuthService",
    "AdminSubmissionService",
]
