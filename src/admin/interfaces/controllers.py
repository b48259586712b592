"""
Admin Controllers (API Routes)
==============================

FastAPI routes for agency back-office staff. Every route except login
requires a bearer token issued by POST /api/admin/login.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.admin.application import (
    AdminAuthService,
    AdminSubmissionService,
    AdminSubmissionView,
    LoginRequest,
    LoginResponse,
    SubmissionReviewRequest,
)
from src.admin.domain import AdminUser
from src.admin.infrastructure import (
    BcryptPasswordHasher,
    JWTTokenService,
    SQLAlchemyAdminUserRepository,
)
from src.core import AuthenticationException, AuthorizationException
from src.infrastructure.database import get_session
from src.intake.application import ApiResponse
from src.intake.infrastructure import SQLAlchemySubmissionRepository
from src.shared.infrastructure.logging import get_context_logger

router = APIRouter(prefix="/api/admin", tags=["Admin"])

bearer_scheme = HTTPBearer(auto_error=False)


# ========== Dependencies ==========

async def get_auth_service(session: AsyncSession = Depends(get_session)) -> AdminAuthService:
    return AdminAuthService(
        users=SQLAlchemyAdminUserRepository(session),
        hasher=BcryptPasswordHasher(),
        tokens=JWTTokenService(),
    )


async def get_admin_submission_service(
    session: AsyncSession = Depends(get_session)
) -> AdminSubmissionService:
    return AdminSubmissionService(SQLAlchemySubmissionRepository(session))


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AdminAuthService = Depends(get_auth_service)
) -> AdminUser:
    """Resolve the bearer token to a user holding the admin role (401, then 403)."""
    if credentials is None:
        raise AuthenticationException("Unauthorized: No token provided.")
    user = await auth.authenticate_token(credentials.credentials)
    if not user.is_admin:
        raise AuthorizationException("Forbidden: Access is restricted to administrators.")
    return user


# ========== Route Handlers ==========

@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Admin login",
    responses={401: {"description": "Invalid credentials"}}
)
async def login(
    request: Request,
    payload: LoginRequest,
    auth: AdminAuthService = Depends(get_auth_service)
):
    logger = get_context_logger(__name__, getattr(request.state, "correlation_id", None))
    logger.info("Admin login attempt", extra={"username": payload.username})

    result = await auth.login(payload.username, payload.password)
    return ApiResponse[LoginResponse](message="Login successful.", data=result)


@router.get(
    "/submissions",
    response_model=ApiResponse[List[AdminSubmissionView]],
    summary="List submissions routed to the admin's agency"
)
async def list_submissions(
    admin: AdminUser = Depends(get_current_admin),
    service: AdminSubmissionService = Depends(get_admin_submission_service)
):
    submissions = await service.list_for_agency(admin)
    return ApiResponse[List[AdminSubmissionView]](
        data=[AdminSubmissionView.from_domain(s) for s in submissions]
    )


@router.get(
    "/submissions/{submission_id}",
    response_model=ApiResponse[AdminSubmissionView],
    summary="Get one submission",
    responses={403: {"description": "Submission belongs to another agency"}, 404: {"description": "Not found"}}
)
async def get_submission(
    submission_id: int,
    admin: AdminUser = Depends(get_current_admin),
    service: AdminSubmissionService = Depends(get_admin_submission_service)
):
    submission = await service.get_for_admin(admin, submission_id)
    return ApiResponse[AdminSubmissionView](data=AdminSubmissionView.from_domain(submission))


@router.put(
    "/submissions/{submission_id}",
    response_model=ApiResponse[AdminSubmissionView],
    summary="Update submission status and response",
    description="""
    Update the status and the response shown to the citizen.

    Omitting `admin_response` keeps the current response, `null` clears it.
    Category, agency and ticket ID never change.
    """,
    responses={403: {"description": "Submission belongs to another agency"}, 404: {"description": "Not found"}}
)
async def update_submission(
    request: Request,
    submission_id: int,
    payload: SubmissionReviewRequest,
    db: AsyncSession = Depends(get_session),
    admin: AdminUser = Depends(get_current_admin),
    service: AdminSubmissionService = Depends(get_admin_submission_service)
):
    logger = get_context_logger(__name__, getattr(request.state, "correlation_id", None))
    logger.info(
        "Updating submission",
        extra={"submission_id": submission_id, "status": payload.status, "user_id": admin.id}
    )

    submission = await service.update_for_admin(admin, submission_id, payload)
    await db.commit()

    return ApiResponse[AdminSubmissionView](
        message="Submission updated successfully.",
        data=AdminSubmissionView.from_domain(submission),
    )
