"""
Intake Repository Interfaces
============================

Storage contracts the intake services depend on (Dependency Inversion).

The routing engine only uses the read-only lookups; inserts and updates are
issued by the submission services after routing has finished.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.intake.domain import Agency, Category, Submission


class ICategoryRepository(ABC):
    """Interface for category data access."""

    @abstractmethod
    async def find_by_id(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""

    @abstractmethod
    async def list_all(self) -> List[Category]:
        """List all categories ordered by name."""


class IAgencyRepository(ABC):
    """Interface for agency data access."""

    @abstractmethod
    async def find_by_id(self, agency_id: int) -> Optional[Agency]:
        """Get agency by ID."""

    @abstractmethod
    async def list_all(self) -> List[Agency]:
        """List all agencies ordered by name."""


class ISubmissionRepository(ABC):
    """Interface for submission data access."""

    @abstractmethod
    async def count_created_between(self, start: datetime, end: datetime) -> int:
        """Count submissions with created_at in [start, end]."""

    @abstractmethod
    async def exists_by_ticket_id(self, ticket_id: str) -> bool:
        """Check whether a ticket ID is already taken."""

    @abstractmethod
    async def create(self, submission: Submission) -> Submission:
        """
        Insert a new submission.

        Raises:
            DuplicateTicketIdException: ticket_id is already taken
        """

    @abstractmethod
    async def get_by_ticket_id(self, ticket_id: str) -> Optional[Submission]:
        """Get submission (with category and agency) by ticket ID."""

    @abstractmethod
    async def get_by_id(self, submission_id: int) -> Optional[Submission]:
        """Get submission (with category and agency) by internal ID."""

    @abstractmethod
    async def list_by_agency(self, agency_id: int) -> List[Submission]:
        """Submissions routed to an agency, newest first."""

    @abstractmethod
    async def update_review(self, submission: Submission) -> Submission:
        """Persist status and admin_response of an existing submission."""

    @abstractmethod
    async def count_all(self) -> int:
        """Total number of submissions."""

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        """Submission counts keyed by status."""

    @abstractmethod
    async def count_by_category(self) -> List[Tuple[Optional[str], int]]:
        """(category name or None, count) pairs."""
