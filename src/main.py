"""
Citizen Engagement Service - Main Application
=============================================

Citizen complaint intake with keyword-based categorization and agency
routing.

Modules:
- Intake: accept complaints, route them to an agency, issue ticket IDs
- Admin: agency staff review and answer the complaints routed to them

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services, routing engine and DTOs
- Domain: Entities, value objects and the keyword classifier
- Infrastructure: Database, lexicon loader, security
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from src.config import settings
from src.core import ApplicationException

# Infrastructure
from src.infrastructure.database import (
    init_database,
    close_database,
    create_tables,
    ping_database,
)

# Intake engine
from src.intake.domain import KeywordClassifier
from src.intake.infrastructure import load_lexicon

# Module Routers
from src.intake.interfaces import intake_router
from src.admin.interfaces import admin_router

# Shared
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler,
    request_validation_exception_handler,
)
from src.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database
    3. Create database tables
    4. Load the keyword lexicon and build the classifier

    SHUTDOWN:
    1. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Citizen Engagement Service", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Initializing database")
    init_database()

    # If the database is not available the server still starts, but
    # database-dependent endpoints will fail
    logger.info("Creating database tables")
    try:
        await create_tables()
    except Exception as e:
        logger.warning(f"Database not available - running in degraded mode: {e}")

    # Loaded once; the classifier never sees a changing lexicon
    logger.info("Loading keyword lexicon", extra={"path": str(settings.keywords_path)})
    lexicon = load_lexicon(settings.keywords_path)
    app.state.lexicon = lexicon
    app.state.classifier = KeywordClassifier(lexicon, fallback_language=settings.default_language)

    logger.info("Citizen Engagement Service started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Citizen Engagement Service")
    await close_database()
    logger.info("Citizen Engagement Service shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Citizen Engagement API",
    description="""
    ## Citizen Complaint Intake and Routing

    Citizens submit complaints in English or Kinyarwanda. Each complaint is
    categorized, routed to the responsible government agency and given a
    ticket ID the citizen can use to follow up.

    ---

    ### 📨 Intake Module

    **Endpoints:**
    - `POST /api/submissions` - Submit a complaint, returns a ticket ID
    - `GET /api/submissions/{ticket_id}` - Track a complaint
    - `GET /api/agencies` - List agencies
    - `GET /api/categories` - List categories
    - `GET /api/stats/summary` - Submission statistics

    **Routing order:**
    1. Category chosen by the citizen
    2. Best keyword match on the description
    3. The `General` category

    ---

    ### 🏛️ Admin Module

    **Endpoints:**
    - `POST /api/admin/login` - Obtain a bearer token
    - `GET /api/admin/submissions` - Complaints routed to your agency
    - `GET /api/admin/submissions/{id}` - One complaint
    - `PUT /api/admin/submissions/{id}` - Update status and response

    ---
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(intake_router)
app.include_router(admin_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "database": "connected",
                        "lexicon": {"english": 8, "kinyarwanda": 8}
                    }
                }
            }
        }
    }
})
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Returns service health status including:
    - Database connectivity
    - Categories per lexicon language (empty when the lexicon failed to load)
    """
    database_ok = await ping_database()
    lexicon = getattr(request.app.state, "lexicon", None)

    checks = {
        "database": "connected" if database_ok else "unavailable",
        "lexicon": (
            {lang: lexicon.category_count(lang) for lang in lexicon.languages}
            if lexicon is not None else "not_loaded"
        )
    }

    return {
        "status": "healthy" if database_ok else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"], responses={
    200: {
        "description": "API information",
        "content": {
            "application/json": {
                "example": {
                    "service": "Citizen Engagement Service",
                    "version": "1.0.0",
                    "architecture": "Clean Architecture / Modular Monolith",
                    "docs": "/docs",
                    "health": "/health"
                }
            }
        }
    }
})
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Citizen Engagement Service",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "intake": {
                "submit": "POST /api/submissions",
                "track": "GET /api/submissions/{ticket_id}",
                "agencies": "GET /api/agencies",
                "categories": "GET /api/categories",
                "stats": "GET /api/stats/summary"
            },
            "admin": {
                "login": "POST /api/admin/login",
                "submissions": "GET /api/admin/submissions",
                "submission": "GET /api/admin/submissions/{id}",
                "review": "PUT /api/admin/submissions/{id}"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
