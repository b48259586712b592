"""
Admin Application DTOs
======================

Request/response models for the admin API.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.admin.domain import AdminUser
from src.intake.application.dto import SubmissionStatusStr, SubmissionView
from src.intake.domain import Submission


# ========== Request DTOs ==========

class LoginRequest(BaseModel):
    """Admin credentials."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class SubmissionReviewRequest(BaseModel):
    """
    Admin update of a submission.

    Leaving admin_response out keeps the current response; sending null
    clears it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    status: SubmissionStatusStr
    admin_response: Optional[str] = Field(None, max_length=5000)

    @property
    def keeps_response(self) -> bool:
        return "admin_response" not in self.model_fields_set


# ========== Response DTOs ==========

class AdminUserInfo(BaseModel):
    id: int
    username: str
    agency_id: Optional[int]
    role: str

    @classmethod
    def from_domain(cls, user: AdminUser) -> "AdminUserInfo":
        return cls(id=user.id, username=user.username, agency_id=user.agency_id, role=user.role)


class LoginResponse(BaseModel):
    """Issued access token plus the user it belongs to."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: AdminUserInfo


class AdminSubmissionView(SubmissionView):
    """Submission as shown to agency staff, contact details included."""
    citizen_contact: str

    @classmethod
    def from_domain(cls, submission: Submission) -> "AdminSubmissionView":
        return cls(citizen_contact=submission.citizen_contact, **cls._fields_from(submission))
