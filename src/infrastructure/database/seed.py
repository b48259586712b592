"""
Reference Data Seeding
======================

Loads agencies, categories and admin users from a YAML document.

Seeding is idempotent: records whose name (or username) already exists are
skipped, so the same file can be applied repeatedly.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.admin.application import IPasswordHasher
from src.admin.infrastructure.repositories import SQLAlchemyAdminUserRepository
from src.config import AdminRole
from src.core import ConfigurationException
from src.intake.infrastructure.repositories import (
    SQLAlchemyAgencyRepository,
    SQLAlchemyCategoryRepository,
)
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Document schema ==========

class AgencySeed(BaseModel):
    name: str
    contact_email: Optional[str] = None
    contact_information: Optional[str] = None


class CategorySeed(BaseModel):
    name: str
    description: Optional[str] = None
    agency: Optional[str] = Field(None, description="Agency name")


class AdminSeed(BaseModel):
    username: str
    password: str
    agency: Optional[str] = Field(None, description="Agency name")
    role: str = AdminRole.ADMIN


class SeedDocument(BaseModel):
    agencies: List[AgencySeed] = Field(default_factory=list)
    categories: List[CategorySeed] = Field(default_factory=list)
    admins: List[AdminSeed] = Field(default_factory=list)


def load_seed_document(path: Path) -> SeedDocument:
    """
    Raises:
        ConfigurationException: file missing or not a valid seed document
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return SeedDocument.model_validate(data)
    except FileNotFoundError as e:
        raise ConfigurationException(f"Seed file not found: {path}") from e
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise ConfigurationException(f"Invalid seed file {path}: {e}") from e


async def seed_reference_data(
    session: AsyncSession,
    document: SeedDocument,
    hasher: IPasswordHasher,
) -> Dict[str, int]:
    """
    Insert missing reference records.

    Returns:
        Number of records created per kind
    """
    agencies = SQLAlchemyAgencyRepository(session)
    categories = SQLAlchemyCategoryRepository(session)
    admins = SQLAlchemyAdminUserRepository(session)
    created = {"agencies": 0, "categories": 0, "admins": 0}

    agency_ids: Dict[str, int] = {}
    for item in document.agencies:
        agency = await agencies.find_by_name(item.name)
        if agency is None:
            agency = await agencies.create(item.name, item.contact_email, item.contact_information)
            created["agencies"] += 1
        agency_ids[agency.name] = agency.id

    async def agency_id_for(name: Optional[str]) -> Optional[int]:
        if name is None:
            return None
        if name not in agency_ids:
            agency = await agencies.find_by_name(name)
            if agency is None:
                raise ConfigurationException(f"Unknown agency in seed data: {name}")
            agency_ids[name] = agency.id
        return agency_ids[name]

    for item in document.categories:
        if await categories.find_by_name(item.name) is not None:
            continue
        await categories.create(item.name, await agency_id_for(item.agency), item.description)
        created["categories"] += 1

    for item in document.admins:
        if await admins.get_by_username(item.username) is not None:
            continue
        await admins.create(
            username=item.username,
            password_hash=hasher.hash(item.password),
            agency_id=await agency_id_for(item.agency),
            role=item.role,
        )
        created["admins"] += 1

    logger.info("Reference data seeded", extra=created)
    return created
