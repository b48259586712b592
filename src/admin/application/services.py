"""
Admin Application Services
==========================

Authentication and submission review for agency staff.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.admin.application.dto import LoginResponse, AdminUserInfo, SubmissionReviewRequest
from src.admin.domain import AdminUser
from src.core import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
)
from src.intake.application import ISubmissionRepository
from src.intake.domain import Submission
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Ports ==========

class IAdminUserRepository(ABC):

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[AdminUser]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[AdminUser]:
        pass


class IPasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass


class ITokenService(ABC):

    @property
    @abstractmethod
    def expires_in(self) -> int:
        """Token lifetime in seconds."""

    @abstractmethod
    def issue(self, user: AdminUser) -> str:
        pass

    @abstractmethod
    def decode(self, token: str) -> Dict[str, Any]:
        """
        Raises:
            AuthenticationException: invalid or expired token
        """


# ========== Services ==========

class AdminAuthService:
    """Login and access token checks."""

    def __init__(
        self,
        users: IAdminUserRepository,
        hasher: IPasswordHasher,
        tokens: ITokenService,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def login(self, username: str, password: str) -> LoginResponse:
        """
        Raises:
            AuthenticationException: unknown user or wrong password
        """
        user = await self._users.get_by_username(username)
        # Same message for both cases so usernames cannot be probed
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.info("Admin login rejected", extra={"username": username})
            raise AuthenticationException("Invalid credentials.")

        logger.info("Admin logged in", extra={"user_id": user.id, "agency_id": user.agency_id})
        return LoginResponse(
            access_token=self._tokens.issue(user),
            expires_in=self._tokens.expires_in,
            user=AdminUserInfo.from_domain(user),
        )

    async def authenticate_token(self, token: str) -> AdminUser:
        """
        Resolve a bearer token to its admin user.

        Raises:
            AuthenticationException: bad token or the user no longer exists
        """
        claims = self._tokens.decode(token)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationException("Invalid token.")

        user = await self._users.get_by_id(user_id)
        if user is None:
            raise AuthenticationException("Invalid token.")
        return user


class AdminSubmissionService:
    """Submission review scoped to the admin's agency."""

    def __init__(self, submissions: ISubmissionRepository):
        self._submissions = submissions

    async def list_for_agency(self, admin: AdminUser) -> List[Submission]:
        """Newest first. A user without an agency or the admin role sees nothing."""
        if admin.agency_id is None or not admin.is_admin:
            return []
        return await self._submissions.list_by_agency(admin.agency_id)

    async def get_for_admin(self, admin: AdminUser, submission_id: int) -> Submission:
        """
        Raises:
            ResourceNotFoundException: unknown submission
            AuthorizationException: submission belongs to another agency
        """
        submission = await self._submissions.get_by_id(submission_id)
        if submission is None:
            raise ResourceNotFoundException("Submission", str(submission_id))
        if not admin.can_manage(submission):
            logger.warning(
                "Admin denied access to submission",
                extra={
                    "user_id": admin.id,
                    "agency_id": admin.agency_id,
                    "submission_id": submission_id
                }
            )
            raise AuthorizationException("Forbidden: You cannot access this submission.")
        return submission

    async def update_for_admin(
        self,
        admin: AdminUser,
        submission_id: int,
        review: SubmissionReviewRequest
    ) -> Submission:
        """
        Update status and response. Routing fields are never changed.

        Raises:
            ResourceNotFoundException: unknown submission
            AuthorizationException: submission belongs to another agency
        """
        submission = await self.get_for_admin(admin, submission_id)
        previous_status = submission.status

        submission.apply_review(
            status=review.status,
            admin_response=review.admin_response,
            keep_response=review.keeps_response,
        )
        updated = await self._submissions.update_review(submission)

        logger.info(
            "Submission reviewed",
            extra={
                "submission_id": submission_id,
                "ticket_id": updated.ticket_id,
                "old_status": previous_status,
                "new_status": updated.status,
                "user_id": admin.id
            }
        )
        return updated
