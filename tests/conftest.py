"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
import uuid
from collections.abc import Generator, Iterable
from typing import Any
from uuid import UUID

import pytest

from memberhub.gateway import (
    DataGateway,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    SubscriptionRecord,
    UserRecord,
)


class InMemoryGateway(DataGateway):
    """Dict-backed gateway recording every call it receives.

    Bulk finders suspend once, like a real round-trip, and return rows in
    reverse insertion order so callers cannot rely on ordering.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, UserRecord] = {}
        self.profiles: dict[UUID, ProfileRecord] = {}
        self.posts: dict[UUID, PostRecord] = {}
        self.member_types: dict[str, MemberTypeRecord] = {}
        self.subscriptions: list[SubscriptionRecord] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_with: Exception | None = None

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [args for called, args in self.calls if called == name]

    async def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with

    # Fixture helpers
    def add_user(self, name: str, balance: float = 0.0) -> UserRecord:
        user = UserRecord(id=uuid.uuid4(), name=name, balance=balance)
        self.users[user.id] = user
        return user

    def add_profile(
        self, user: UserRecord, member_type_id: str = "BASIC", year_of_birth: int = 1990
    ) -> ProfileRecord:
        profile = ProfileRecord(
            id=uuid.uuid4(),
            is_male=True,
            year_of_birth=year_of_birth,
            user_id=user.id,
            member_type_id=member_type_id,
        )
        self.profiles[profile.id] = profile
        return profile

    def add_post(self, author: UserRecord, title: str, content: str = "") -> PostRecord:
        post = PostRecord(id=uuid.uuid4(), title=title, content=content, author_id=author.id)
        self.posts[post.id] = post
        return post

    def subscribe(self, subscriber: UserRecord, author: UserRecord) -> None:
        self.subscriptions.append(
            SubscriptionRecord(subscriber_id=subscriber.id, author_id=author.id)
        )

    # Users
    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        await self._record("find_user_by_id", user_id)
        return self.users.get(user_id)

    async def find_users_by_ids(self, user_ids: Iterable[UUID]) -> list[UserRecord]:
        ids = list(user_ids)
        await self._record("find_users_by_ids", ids)
        return [user for user in reversed(self.users.values()) if user.id in ids]

    async def find_users(self) -> list[UserRecord]:
        await self._record("find_users")
        return list(self.users.values())

    # Profiles
    async def find_profile_by_id(self, profile_id: UUID) -> ProfileRecord | None:
        await self._record("find_profile_by_id", profile_id)
        return self.profiles.get(profile_id)

    async def find_profiles_by_ids(self, profile_ids: Iterable[UUID]) -> list[ProfileRecord]:
        ids = list(profile_ids)
        await self._record("find_profiles_by_ids", ids)
        return [profile for profile in reversed(self.profiles.values()) if profile.id in ids]

    async def find_profiles_by_user_ids(self, user_ids: Iterable[UUID]) -> list[ProfileRecord]:
        ids = list(user_ids)
        await self._record("find_profiles_by_user_ids", ids)
        return [p for p in reversed(self.profiles.values()) if p.user_id in ids]

    async def find_profiles(self) -> list[ProfileRecord]:
        await self._record("find_profiles")
        return list(self.profiles.values())

    # Posts
    async def find_post_by_id(self, post_id: UUID) -> PostRecord | None:
        await self._record("find_post_by_id", post_id)
        return self.posts.get(post_id)

    async def find_posts_by_ids(self, post_ids: Iterable[UUID]) -> list[PostRecord]:
        ids = list(post_ids)
        await self._record("find_posts_by_ids", ids)
        return [post for post in reversed(self.posts.values()) if post.id in ids]

    async def find_posts_by_author_ids(self, author_ids: Iterable[UUID]) -> list[PostRecord]:
        ids = list(author_ids)
        await self._record("find_posts_by_author_ids", ids)
        return [post for post in self.posts.values() if post.author_id in ids]

    async def find_posts(self) -> list[PostRecord]:
        await self._record("find_posts")
        return list(self.posts.values())

    # Member types
    async def find_member_type_by_id(self, member_type_id: str) -> MemberTypeRecord | None:
        await self._record("find_member_type_by_id", member_type_id)
        return self.member_types.get(member_type_id)

    async def find_member_types_by_ids(
        self, member_type_ids: Iterable[str]
    ) -> list[MemberTypeRecord]:
        ids = list(member_type_ids)
        await self._record("find_member_types_by_ids", ids)
        return [mt for mt in reversed(self.member_types.values()) if mt.id in ids]

    async def find_member_types(self) -> list[MemberTypeRecord]:
        await self._record("find_member_types")
        return list(self.member_types.values())

    # Subscription edges
    async def find_subscriptions_by_subscriber_ids(
        self, subscriber_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        ids = list(subscriber_ids)
        await self._record("find_subscriptions_by_subscriber_ids", ids)
        return [edge for edge in self.subscriptions if edge.subscriber_id in ids]

    async def find_subscriptions_by_author_ids(
        self, author_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        ids = list(author_ids)
        await self._record("find_subscriptions_by_author_ids", ids)
        return [edge for edge in self.subscriptions if edge.author_id in ids]

    # User writes
    async def create_user(self, name: str, balance: float) -> UserRecord:
        await self._record("create_user", name, balance)
        return self.add_user(name, balance)

    async def update_user(
        self, user_id: UUID, name: str | None = None, balance: float | None = None
    ) -> UserRecord | None:
        await self._record("update_user", user_id, name, balance)
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = UserRecord(
            id=user.id,
            name=user.name if name is None else name,
            balance=user.balance if balance is None else balance,
        )
        self.users[user_id] = updated
        return updated

    async def delete_user(self, user_id: UUID) -> bool:
        await self._record("delete_user", user_id)
        if user_id not in self.users:
            return False
        del self.users[user_id]
        self.profiles = {k: p for k, p in self.profiles.items() if p.user_id != user_id}
        self.posts = {k: p for k, p in self.posts.items() if p.author_id != user_id}
        self.subscriptions = [
            edge
            for edge in self.subscriptions
            if user_id not in (edge.subscriber_id, edge.author_id)
        ]
        return True


@pytest.fixture
def gateway() -> InMemoryGateway:
    """An empty store holding the two default member types."""
    store = InMemoryGateway()
    store.member_types["BASIC"] = MemberTypeRecord(
        id="BASIC", discount=2.3, posts_limit_per_month=20
    )
    store.member_types["BUSINESS"] = MemberTypeRecord(
        id="BUSINESS", discount=7.7, posts_limit_per_month=100
    )
    return store


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "requires_db: mark test as requiring database connection")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
