"""
Intake Domain Entities
======================

Pure Python business objects for citizen submissions and the
taxonomy (agencies and categories) they are routed through.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from src.config import SubmissionStatus, VALID_SUBMISSION_STATUSES, Language


@dataclass(frozen=True)
class Agency:
    """Government agency responsible for a set of categories."""
    id: int
    name: str
    contact_email: Optional[str] = None
    contact_information: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """
    Complaint category.

    A category without an agency cannot be routed to anyone; the resolver
    treats it as unusable.
    """
    id: int
    name: str
    agency_id: Optional[int] = None
    description: Optional[str] = None

    @property
    def is_routable(self) -> bool:
        return self.agency_id is not None


@dataclass
class Submission:
    """
    A citizen complaint.

    category_id, agency_id and ticket_id are fixed when the submission is
    created. Only status and admin_response change afterwards.
    """
    id: Optional[int]
    ticket_id: str
    description: str
    citizen_contact: str
    language_preference: str = Language.ENGLISH
    subject: Optional[str] = None
    category_id: Optional[int] = None
    agency_id: Optional[int] = None
    status: str = SubmissionStatus.RECEIVED
    admin_response: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None

    # Populated by repositories when the caller asks for details
    category: Optional[Category] = None
    agency: Optional[Agency] = None

    def __post_init__(self):
        if self.status not in VALID_SUBMISSION_STATUSES:
            raise ValueError(f"Unknown submission status: {self.status}")

    @property
    def is_routed(self) -> bool:
        return self.agency_id is not None

    def apply_review(
        self,
        status: str,
        admin_response: Optional[str] = None,
        keep_response: bool = False
    ) -> None:
        """
        Record an admin review.

        Args:
            status: New lifecycle status
            admin_response: Reply shown to the citizen
            keep_response: Leave the existing reply untouched
        """
        if status not in VALID_SUBMISSION_STATUSES:
            raise ValueError(f"Unknown submission status: {status}")
        self.status = status
        if not keep_response:
            self.admin_response = admin_response
        self.updated_at = datetime.now(timezone.utc)
