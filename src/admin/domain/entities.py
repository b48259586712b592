"""
Admin Domain Entities
=====================
"""

from dataclasses import dataclass
from typing import Optional

from src.config import AdminRole
from src.intake.domain import Submission


@dataclass(frozen=True)
class AdminUser:
    """
    Back-office user attached to one agency.

    An admin only ever sees and updates submissions routed to that agency.
    """
    id: int
    username: str
    password_hash: str
    agency_id: Optional[int] = None
    role: str = AdminRole.ADMIN

    @property
    def is_admin(self) -> bool:
        return self.role == AdminRole.ADMIN

    def can_manage(self, submission: Submission) -> bool:
        return self.is_admin and self.agency_id is not None and submission.agency_id == self.agency_id
