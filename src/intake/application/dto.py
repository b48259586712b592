"""
Intake Application DTOs
=======================

Data Transfer Objects for the intake API layer.

Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.intake.domain import Agency, Category, Submission


# ========== Type Aliases for Literals ==========
LanguageStr = Literal["english", "kinyarwanda"]
SubmissionStatusStr = Literal["Received", "In Progress", "Resolved", "Closed"]

DataT = TypeVar("DataT")


# ========== Envelope ==========

class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope shared by every endpoint."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


# ========== Request DTOs ==========

class SubmissionCreateRequest(BaseModel):
    """Request model for a new citizen submission."""
    model_config = ConfigDict(str_strip_whitespace=True)

    subject: Optional[str] = Field(None, min_length=3, max_length=255, description="Short title")
    description: str = Field(..., min_length=10, max_length=5000, description="Complaint text")
    citizen_contact: str = Field(
        ...,
        min_length=5,
        max_length=255,
        description="Phone number or email used to follow up"
    )
    language_preference: LanguageStr = Field(
        default="english",
        description="Language the description is written in"
    )
    category_id: Optional[int] = Field(
        None,
        ge=1,
        description="Category picked by the citizen, skips automatic classification"
    )


# ========== Response DTOs ==========

class AgencyInfo(BaseModel):
    """Agency information in API responses."""
    id: int
    name: str
    contact_email: Optional[str] = None
    contact_information: Optional[str] = None

    @classmethod
    def from_domain(cls, agency: Agency) -> "AgencyInfo":
        return cls(
            id=agency.id,
            name=agency.name,
            contact_email=agency.contact_email,
            contact_information=agency.contact_information,
        )


class CategoryInfo(BaseModel):
    """Category information in API responses."""
    id: int
    name: str
    description: Optional[str] = None
    agency_id: Optional[int] = None

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryInfo":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            agency_id=category.agency_id,
        )


class SubmissionCreated(BaseModel):
    """Payload returned after a submission is stored."""
    ticket_id: str


class SubmissionView(BaseModel):
    """Submission as shown to the citizen tracking a ticket."""
    id: int
    ticket_id: str
    subject: Optional[str]
    description: str
    status: SubmissionStatusStr
    admin_response: Optional[str]
    language_preference: LanguageStr
    category_id: Optional[int]
    agency_id: Optional[int]
    created_at: datetime
    updated_at: Optional[datetime]
    category: Optional[CategoryInfo] = None
    agency: Optional[AgencyInfo] = None

    @classmethod
    def _fields_from(cls, submission: Submission) -> dict:
        return dict(
            id=submission.id,
            ticket_id=submission.ticket_id,
            subject=submission.subject,
            description=submission.description,
            status=submission.status,
            admin_response=submission.admin_response,
            language_preference=submission.language_preference,
            category_id=submission.category_id,
            agency_id=submission.agency_id,
            created_at=submission.created_at,
            updated_at=submission.updated_at,
            category=CategoryInfo.from_domain(submission.category) if submission.category else None,
            agency=AgencyInfo.from_domain(submission.agency) if submission.agency else None,
        )

    @classmethod
    def from_domain(cls, submission: Submission) -> "SubmissionView":
        return cls(**cls._fields_from(submission))


class CategoryCount(BaseModel):
    category_name: str
    count: int


class StatsSummary(BaseModel):
    """Aggregated statistics for the public dashboard."""
    total_submissions: int
    submissions_by_status: Dict[str, int]
    submissions_by_category: List[CategoryCount]
