"""
Admin Domain Layer
==================

Contains:
- Entities: AdminUser
"""

from src.admin.domain.entities import AdminUser

__all__ = ["AdminUser"]
