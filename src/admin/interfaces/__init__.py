"""
Admin Interfaces Layer
======================

Contains:
- Controllers: FastAPI route handlers
"""

from src.admin.interfaces.controllers import router as admin_router, get_current_admin

__all__ = ["admin_router", "get_current_admin"]
