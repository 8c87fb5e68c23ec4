"""
Reusable seed data functions for database initialization.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MemberTypes
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_MEMBER_TYPES: tuple[dict[str, object], ...] = (
    {"id": "BASIC", "discount": 2.3, "posts_limit_per_month": 20},
    {"id": "BUSINESS", "discount": 7.7, "posts_limit_per_month": 100},
)


async def ensure_member_types(db: AsyncSession) -> list[str]:
    """
    Insert the default member types that are missing.

    Existing rows are left untouched, so running this twice is harmless.

    Returns:
        IDs of the member types that were created
    """
    wanted = {str(member_type["id"]) for member_type in DEFAULT_MEMBER_TYPES}
    result = await db.execute(select(MemberTypes.id).where(MemberTypes.id.in_(wanted)))
    existing = set(result.scalars().all())

    created = []
    for member_type in DEFAULT_MEMBER_TYPES:
        if member_type["id"] in existing:
            continue
        db.add(MemberTypes(**member_type))
        created.append(str(member_type["id"]))

    if created:
        await db.flush()
        logger.info("Created member types", member_type_ids=created)
    else:
        logger.info("Member types already present")

    return created


async def seed_initial_data(db: AsyncSession) -> None:
    """Seed everything a fresh database needs."""
    await ensure_member_types(db)
    await db.commit()
