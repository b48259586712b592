"""
Intake Application Layer
========================

Application layer for the citizen intake module.

Contains:
- Routing engine: CategoryResolver strategies and RoutingOrchestrator
- Ticketing: TicketIdGenerator
- Services: submission, directory and statistics use cases
- DTOs: Data transfer objects for API serialization
- Repository interfaces
"""

from src.intake.application.dto import (
    ApiResponse,
    SubmissionCreateRequest,
    SubmissionCreated,
    SubmissionView,
    AgencyInfo,
    CategoryInfo,
    CategoryCount,
    StatsSummary,
)
from src.intake.application.interfaces import (
    ICategoryRepository,
    IAgencyRepository,
    ISubmissionRepository,
)
from src.intake.application.routing import (
    ResolutionContext,
    CategoryResolver,
    RoutingOrchestrator,
    explicit_category,
    classified_category,
    default_category,
    DEFAULT_STRATEGIES,
)
from src.intake.application.ticketing import TicketIdGenerator, local_now
from src.intake.application.services import (
    SubmissionService,
    DirectoryService,
    StatsService,
)

__all__ = [
    # DTOs
    "ApiResponse",
    "SubmissionCreateRequest",
    "SubmissionCreated",
    "SubmissionView",
    "AgencyInfo",
    "CategoryInfo",
    "CategoryCount",
    "StatsSummary",
    # Repository Interfaces
    "ICategoryRepository",
    "IAgencyRepository",
    "ISubmissionRepository",
    # Routing
    "ResolutionContext",
    "CategoryResolver",
    "RoutingOrchestrator",
    "explicit_category",
    "classified_category",
    "default_category",
    "DEFAULT_STRATEGIES",
    # Ticketing
    "TicketIdGenerator",
    "local_now",
    # Services
    "SubmissionService",
    "DirectoryService",
    "StatsService",
]
