"""Data access gateway interface and the records it returns."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """A user row."""

    id: UUID
    name: str
    balance: float


@dataclass(frozen=True)
class ProfileRecord:
    """A profile row. `user_id` is unique across profiles."""

    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: str


@dataclass(frozen=True)
class PostRecord:
    """A post row."""

    id: UUID
    title: str
    content: str
    author_id: UUID


@dataclass(frozen=True)
class MemberTypeRecord:
    """A membership tier row, keyed by its enum name (BASIC, BUSINESS)."""

    id: str
    discount: float
    posts_limit_per_month: int


@dataclass(frozen=True)
class SubscriptionRecord:
    """A directed subscription edge: `subscriber_id` follows `author_id`."""

    subscriber_id: UUID
    author_id: UUID


class DataGateway(ABC):
    """Bulk reads and user writes against the backing store.

    Bulk finders return rows in no particular order; callers re-key them.
    Finders never raise for missing rows. Store failures propagate unchanged.
    """

    # Users
    @abstractmethod
    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        pass

    @abstractmethod
    async def find_users_by_ids(self, user_ids: Iterable[UUID]) -> list[UserRecord]:
        pass

    @abstractmethod
    async def find_users(self) -> list[UserRecord]:
        pass

    # Profiles
    @abstractmethod
    async def find_profile_by_id(self, profile_id: UUID) -> ProfileRecord | None:
        pass

    @abstractmethod
    async def find_profiles_by_ids(self, profile_ids: Iterable[UUID]) -> list[ProfileRecord]:
        pass

    @abstractmethod
    async def find_profiles_by_user_ids(self, user_ids: Iterable[UUID]) -> list[ProfileRecord]:
        pass

    @abstractmethod
    async def find_profiles(self) -> list[ProfileRecord]:
        pass

    # Posts
    @abstractmethod
    async def find_post_by_id(self, post_id: UUID) -> PostRecord | None:
        pass

    @abstractmethod
    async def find_posts_by_ids(self, post_ids: Iterable[UUID]) -> list[PostRecord]:
        pass

    @abstractmethod
    async def find_posts_by_author_ids(self, author_ids: Iterable[UUID]) -> list[PostRecord]:
        pass

    @abstractmethod
    async def find_posts(self) -> list[PostRecord]:
        pass

    # Member types
    @abstractmethod
    async def find_member_type_by_id(self, member_type_id: str) -> MemberTypeRecord | None:
        pass

    @abstractmethod
    async def find_member_types_by_ids(
        self, member_type_ids: Iterable[str]
    ) -> list[MemberTypeRecord]:
        pass

    @abstractmethod
    async def find_member_types(self) -> list[MemberTypeRecord]:
        pass

    # Subscription edges
    @abstractmethod
    async def find_subscriptions_by_subscriber_ids(
        self, subscriber_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        pass

    @abstractmethod
    async def find_subscriptions_by_author_ids(
        self, author_ids: Iterable[UUID]
    ) -> list[SubscriptionRecord]:
        pass

    # User writes
    @abstractmethod
    async def create_user(self, name: str, balance: float) -> UserRecord:
        pass

    @abstractmethod
    async def update_user(
        self, user_id: UUID, name: str | None = None, balance: float | None = None
    ) -> UserRecord | None:
        """Apply the given fields; returns None when the user does not exist."""

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user with its profile, posts and subscription edges.

        Returns False when the user does not exist.
        """
