"""
Admin Infrastructure Repositories
=================================
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.admin.application import IAdminUserRepository
from src.admin.domain import AdminUser
from src.admin.infrastructure.models import AdminUserModel
from src.config import AdminRole
from src.intake.infrastructure.repositories import translate_errors


def admin_from_model(model: AdminUserModel) -> AdminUser:
    return AdminUser(
        id=model.id,
        username=model.username,
        password_hash=model.password_hash,
        agency_id=model.agency_id,
        role=model.role,
    )


class SQLAlchemyAdminUserRepository(IAdminUserRepository):
    """SQLAlchemy implementation for admin users."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_username(self, username: str) -> Optional[AdminUser]:
        stmt = select(AdminUserModel).where(AdminUserModel.username == username)
        with translate_errors("find admin user"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return admin_from_model(model) if model else None

    async def get_by_id(self, user_id: int) -> Optional[AdminUser]:
        with translate_errors("find admin user"):
            model = await self._session.get(AdminUserModel, user_id)
        return admin_from_model(model) if model else None

    async def create(
        self,
        username: str,
        password_hash: str,
        agency_id: Optional[int] = None,
        role: str = AdminRole.ADMIN
    ) -> AdminUser:
        model = AdminUserModel(
            username=username,
            password_hash=password_hash,
            agency_id=agency_id,
            role=role,
        )
        self._session.add(model)
        with translate_errors("create admin user"):
            await self._session.flush()
        return admin_from_model(model)
