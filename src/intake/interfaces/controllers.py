"""
Intake Controllers (API Routes)
===============================

FastAPI routes for citizen submissions and public reference data.

Controllers are thin - they delegate to application services.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_session
from src.intake.application import (
    AgencyInfo,
    ApiResponse,
    CategoryInfo,
    CategoryResolver,
    DirectoryService,
    RoutingOrchestrator,
    StatsService,
    StatsSummary,
    SubmissionCreateRequest,
    SubmissionCreated,
    SubmissionService,
    SubmissionView,
    TicketIdGenerator,
)
from src.intake.domain import KeywordClassifier
from src.intake.infrastructure import (
    SQLAlchemyAgencyRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemySubmissionRepository,
)
from src.shared.infrastructure.logging import get_context_logger

router = APIRouter(prefix="/api", tags=["Citizen Intake"])


# ========== Example payloads for Swagger ==========

SUBMISSION_REQUEST_EXAMPLE = {
    "subject": "No water since Monday",
    "description": "There has been no water supply in our sector since Monday, the pipe near the market is broken.",
    "citizen_contact": "+250788000000",
    "language_preference": "english"
}

SUBMISSION_CREATED_EXAMPLE = {
    "success": True,
    "message": "Submission received successfully.",
    "data": {"ticket_id": "CE-20240115-00042"}
}


# ========== Dependencies ==========

def get_classifier(request: Request) -> KeywordClassifier:
    """Classifier built from the lexicon loaded at startup."""
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Categorization engine not initialized"
        )
    return classifier


async def get_submission_service(
    session: AsyncSession = Depends(get_session),
    classifier: KeywordClassifier = Depends(get_classifier)
) -> SubmissionService:
    """Get submission service wired to the request's session."""
    submissions = SQLAlchemySubmissionRepository(session)
    resolver = CategoryResolver(SQLAlchemyCategoryRepository(session))
    return SubmissionService(
        submissions=submissions,
        orchestrator=RoutingOrchestrator(classifier, resolver),
        ticket_generator=TicketIdGenerator(submissions),
    )


async def get_directory_service(
    session: AsyncSession = Depends(get_session)
) -> DirectoryService:
    return DirectoryService(
        SQLAlchemyAgencyRepository(session),
        SQLAlchemyCategoryRepository(session),
    )


async def get_stats_service(
    session: AsyncSession = Depends(get_session)
) -> StatsService:
    return StatsService(SQLAlchemySubmissionRepository(session))


# ========== Route Handlers ==========

@router.post(
    "/submissions",
    response_model=ApiResponse[SubmissionCreated],
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new complaint",
    description="""
    Store a citizen complaint and return its tracking ticket ID.

    The complaint is routed to a category and agency:
    1. `category_id`, when given and assigned to an agency
    2. otherwise the category whose keywords best match the description
    3. otherwise the `General` category

    A complaint that cannot be routed is still accepted.
    """,
    responses={
        201: {
            "description": "Submission stored",
            "content": {"application/json": {"example": SUBMISSION_CREATED_EXAMPLE}}
        },
        500: {"description": "No unique ticket ID could be issued"}
    }
)
async def create_submission(
    request: Request,
    payload: SubmissionCreateRequest,
    db: AsyncSession = Depends(get_session),
    service: SubmissionService = Depends(get_submission_service)
):
    logger = get_context_logger(__name__, getattr(request.state, "correlation_id", None))
    logger.info(
        "Creating submission",
        extra={
            "language": payload.language_preference,
            "has_category_id": payload.category_id is not None
        }
    )

    submission = await service.create_submission(payload)
    await db.commit()

    return ApiResponse[SubmissionCreated](
        message="Submission received successfully.",
        data=SubmissionCreated(ticket_id=submission.ticket_id),
    )


@router.get(
    "/submissions/{ticket_id}",
    response_model=ApiResponse[SubmissionView],
    summary="Track a submission by ticket ID",
    responses={404: {"description": "Unknown ticket ID"}}
)
async def get_submission(
    ticket_id: str,
    service: SubmissionService = Depends(get_submission_service)
):
    ticket_id = ticket_id.strip()
    if not ticket_id:
        raise HTTPException(status_code=400, detail="Valid Ticket ID is required.")

    submission = await service.get_by_ticket_id(ticket_id)
    return ApiResponse[SubmissionView](data=SubmissionView.from_domain(submission))


@router.get(
    "/agencies",
    response_model=ApiResponse[List[AgencyInfo]],
    summary="List government agencies"
)
async def list_agencies(service: DirectoryService = Depends(get_directory_service)):
    agencies = await service.list_agencies()
    return ApiResponse[List[AgencyInfo]](data=[AgencyInfo.from_domain(a) for a in agencies])


@router.get(
    "/categories",
    response_model=ApiResponse[List[CategoryInfo]],
    summary="List complaint categories"
)
async def list_categories(service: DirectoryService = Depends(get_directory_service)):
    categories = await service.list_categories()
    return ApiResponse[List[CategoryInfo]](data=[CategoryInfo.from_domain(c) for c in categories])


@router.get(
    "/stats/summary",
    response_model=ApiResponse[StatsSummary],
    summary="Aggregated submission statistics"
)
async def stats_summary(service: StatsService = Depends(get_stats_service)):
    return ApiResponse[StatsSummary](data=await service.summary())
