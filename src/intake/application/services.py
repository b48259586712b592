"""
Intake Application Services
===========================

Application services for citizen submissions.

Orchestrates the routing engine, ticket ID generation and repositories.
"""

from typing import List

from src.config import SubmissionStatus
from src.core import ResourceNotFoundException
from src.intake.application.dto import (
    CategoryCount,
    StatsSummary,
    SubmissionCreateRequest,
)
from src.intake.application.interfaces import (
    IAgencyRepository,
    ICategoryRepository,
    ISubmissionRepository,
)
from src.intake.application.routing import RoutingOrchestrator
from src.intake.application.ticketing import TicketIdGenerator
from src.intake.domain import Agency, Category, Submission
from src.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)

UNCATEGORIZED = "Uncategorized"


class SubmissionService:
    """
    Service for creating and tracking citizen submissions.

    Routing fields (category, agency, ticket ID) are decided here once, at
    creation time, and never rewritten afterwards.
    """

    def __init__(
        self,
        submissions: ISubmissionRepository,
        orchestrator: RoutingOrchestrator,
        ticket_generator: TicketIdGenerator,
    ):
        self._submissions = submissions
        self._orchestrator = orchestrator
        self._tickets = ticket_generator

    async def create_submission(self, request: SubmissionCreateRequest) -> Submission:
        """
        Route and store a new submission.

        An unroutable submission is still stored, with null category and
        agency.

        Raises:
            TicketIdExhaustedException: no unique ticket ID could be issued
        """
        with log_latency(logger, "routing", language=request.language_preference):
            decision = await self._orchestrator.route(
                description=request.description,
                language_preference=request.language_preference,
                explicit_category_id=request.category_id,
            )

        if decision is not None:
            logger.info(
                "Submission routed",
                extra={
                    "strategy": decision.strategy,
                    "category_id": decision.category_id,
                    "agency_id": decision.agency_id
                }
            )

        async def insert(ticket_id: str) -> Submission:
            return await self._submissions.create(Submission(
                id=None,
                ticket_id=ticket_id,
                subject=request.subject,
                description=request.description,
                citizen_contact=request.citizen_contact,
                language_preference=request.language_preference,
                category_id=decision.category_id if decision else None,
                agency_id=decision.agency_id if decision else None,
                status=SubmissionStatus.RECEIVED,
            ))

        # The unique constraint can still reject a checked ID when another
        # request inserts the same one first; issue() then retries within
        # the same attempt budget.
        created = await self._tickets.issue(insert)
        logger.info(
            "Submission created",
            extra={"ticket_id": created.ticket_id, "routed": created.is_routed}
        )
        return created

    async def get_by_ticket_id(self, ticket_id: str) -> Submission:
        """
        Raises:
            ResourceNotFoundException: unknown ticket ID
        """
        submission = await self._submissions.get_by_ticket_id(ticket_id)
        if submission is None:
            raise ResourceNotFoundException("Submission", ticket_id)
        return submission


class DirectoryService:
    """Read-only access to agencies and categories."""

    def __init__(self, agencies: IAgencyRepository, categories: ICategoryRepository):
        self._agencies = agencies
        self._categories = categories

    async def list_agencies(self) -> List[Agency]:
        return await self._agencies.list_all()

    async def list_categories(self) -> List[Category]:
        return await self._categories.list_all()


class StatsService:
    """Aggregated submission statistics."""

    def __init__(self, submissions: ISubmissionRepository):
        self._submissions = submissions

    async def summary(self) -> StatsSummary:
        total = await self._submissions.count_all()
        by_status = await self._submissions.count_by_status()
        by_category = await self._submissions.count_by_category()

        return StatsSummary(
            total_submissions=total,
            submissions_by_status=by_status,
            submissions_by_category=[
                CategoryCount(category_name=name or UNCATEGORIZED, count=count)
                for name, count in by_category
            ],
        )
