"""
Intake Interfaces Layer
=======================

Interface adapters (controllers) for the citizen intake module.

Contains:
- Controllers: FastAPI route handlers
"""

from src.intake.interfaces.controllers import router as intake_router, get_classifier

__all__ = ["intake_router", "get_classifier"]
