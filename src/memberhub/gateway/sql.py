"""SQLAlchemy implementation of the data access gateway."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from contextlib import AbstractAsyncContextManager
from uuid import UUID, uuid4

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import MemberTypes, Posts, Profiles, SubscribersOnAuthors, Users
from ..logging import get_logger
from .base import (
    DataGateway,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    SubscriptionRecord,
    UserRecord,
)

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def user_record(row: Users) -> UserRecord:
    return UserRecord(id=row.id, name=row.name, balance=row.balance)


def profile_record(row: Profiles) -> ProfileRecord:
    return ProfileRecord(
        id=row.id,
        is_male=row.is_male,
        year_of_birth=row.year_of_birth,
        user_id=row.user_id,
        member_type_id=row.member_type_id,
    )


def post_record(row: Posts) -> PostRecord:
    return PostRecord(id=row.id, title=row.title, content=row.content, author_id=row.author_id)


def member_type_record(row: MemberTypes) -> MemberTypeRecord:
    return MemberTypeRecord(
        id=row.id,
        discount=row.discount,
        posts_limit_per_month=row.posts_limit_per_month,
    )


def subscription_record(row: SubscribersOnAuthors) -> SubscriptionRecord:
    return SubscriptionRecord(subscriber_id=row.subscriber_id, author_id=row.author_id)


class SqlDataGateway(DataGateway):
    """Gateway backed by the shared async SQLAlchemy session pool.

    Every call runs in its own session, so rows are converted to records
    before the session closes.
    """

    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session_factory = session_factory

    async def _scalars(self, stmt) -> list:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _scalar_one_or_none(self, stmt):
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    # Users
    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        row = await self._scalar_one_or_none(select(Users).where(Users.id == user_id))
        return user_record(row) if row else None

    async def find_users_by_ids(self, user_ids: Iterable[UUID]) -> list[UserRecord]:
        ids = list(user_ids)
        if not ids:
            return []
        rows = await self._scalars(select(Users).where(Users.id.in_(ids)))
        return [user_record(row) for row in rows]

    async def find_users(self) -> list[UserRecord]:
        rows = await self._scalars(select(Users))
        return [user_record(row) for row in rows]

    # Profiles
    async def find_profile_by_id(self, profile_id: UUID) -> ProfileRecord | None:
        row = await self._scalar_one_or_none(select(Profiles).where(Profiles.id == profile_id))
        return profile_record(row) if row else None

    async def find_profiles_by_ids(self, profile_ids: Iterable[UUID]) -> list[ProfileRecord]:
        ids = list(profile_ids)
        if not ids:
            return []
        rows = await self._scalars(select(Profiles).where(Profiles.id.in_(ids)))
        return [profile_record(row) for row in rows]

    async def find_profiles_by_user_ids(self, user_ids: Iterable[UUID]) -> list[ProfileRecord]:
        ids = list(user_ids)
        if not ids:
            return []
        rows = await self._scalars(select(Profiles).where(Profiles.user_id.in_(ids)))
        return [profile_record(row) for row in rows]

    async def find_profiles(self) -> list[ProfileRecord]:
        rows = await self._scalars(select(Profiles))
        return [profile_record(row) for row in rows]

    # Posts
    async def find_post_by_id(self, post_id: UUID) -> PostRecord | None:
        row = await self._scalar_one_or_none(select(Posts).where(Posts.id == post_id))
        return post_record(row) if row else None

    async def find_posts_by_ids(self, post_ids: Iterable[UUID]) -> list[PostRecord]:
        ids = list(post_ids)
        if not ids:
            return []
        rows = await self._scalars(select(Posts).where(Posts.id.in_(ids)))
        return [post_record(row) for row in rows]

    async def find_posts_by_author_ids(self, author_ids: Iterable[UUID]) -> list[PostRecord]:
        ids = list(author_ids)
        if not ids:
            return []
        rows = await self._scalars(select(Posts).where(Posts.author_id.in_(ids)))
        return [post_record(row) for row in rows]

    async def find_posts(self) -> list[PostRecord]:
        rows = await self._scalars(select(Posts))
        return [post_record(row) for row in rows]

    # Member types
    async def find_member_type_by_id(self, member_type_id: str) -> MemberTypeRecord | None:
        row = await self._scalar_one_or_none(
            select(MemberTypes).where(MemberTypes.id == member_type_id)
        )
        return member_type_record(row) if row else None

    async def find_member_types_by_ids(
        self, member_type_ids: Iterable[str]
    ) -> list[MemberTypeRecord]:
        ids = list(member_type_ids)
        if not ids:
            return []
        rows = await self._scalars(select(MemberTypes).where(MemberTypes.id.in_(ids)))
        return [member_type_record(row) for row in rows]

    async def find_member_types(self) -> list[MemberTypeRecord]:
        rows = await self._scalars(select(MemberTypes).order_by(MemberTypes.id))
        return [member_type_record(row) for row in rows]

    # Subscription edges
    async def find_subscriptions_by_subscriber_ids(
        self, subscriber_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        ids = list(subscriber_ids)
        if not ids:
            return []
        rows = await self._scalars(
            select(SubscribersOnAuthors).where(SubscribersOnAuthors.subscriber_id.in_(ids))
        )
        return [subscription_record(row) for row in rows]

    async def find_subscriptions_by_author_ids(
        self, author_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        ids = list(author_ids)
        if not ids:
            return []
        rows = await self._scalars(
            select(SubscribersOnAuthors).where(SubscribersOnAuthors.author_id.in_(ids))
        )
        return [subscription_record(row) for row in rows]

    # User writes
    async def create_user(self, name: str, balance: float) -> UserRecord:
        async with self._session_factory() as session:
            user = Users(id=uuid4(), name=name, balance=balance)
            session.add(user)
            await session.flush()
            record = user_record(user)

        logger.info("User created", user_id=str(record.id))
        return record

    async def update_user(
        self, user_id: UUID, name: str | None = None, balance: float | None = None
    ) -> UserRecord | None:
        async with self._session_factory() as session:
            user = await session.get(Users, user_id)
            if user is None:
                return None

            if name is not None:
                user.name = name
            if balance is not None:
                user.balance = balance

            await session.flush()
            record = user_record(user)

        logger.info("User updated", user_id=str(user_id))
        return record

    async def delete_user(self, user_id: UUID) -> bool:
        async with self._session_factory() as session:
            await session.execute(
                delete(SubscribersOnAuthors).where(
                    or_(
                        SubscribersOnAuthors.subscriber_id == user_id,
                        SubscribersOnAuthors.author_id == user_id,
                    )
                )
            )
            await session.execute(delete(Profiles).where(Profiles.user_id == user_id))
            await session.execute(delete(Posts).where(Posts.author_id == user_id))
            result = await session.execute(delete(Users).where(Users.id == user_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("User deleted", user_id=str(user_id))
        else:
            logger.info("User not found for deletion", user_id=str(user_id))
        return deleted
