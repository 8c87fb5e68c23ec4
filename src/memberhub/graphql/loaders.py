"""
Request-scoped DataLoaders.

Every `load()` issued before the event loop regains control lands in the same
batch. Strawberry's DataLoader caches futures per key, so a batch function
only ever sees distinct keys and a repeated key resolves from cache for the
rest of the request. Build a new `Loaders` for every request.
"""

from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable, Sequence
from functools import partial
from typing import TypeVar
from uuid import UUID

from strawberry.dataloader import DataLoader

from ..gateway import (
    DataGateway,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    SubscriptionRecord,
    UserRecord,
)
from ..logging import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


def key_one(keys: Sequence[K], rows: Iterable[R], key_of: Callable[[R], K]) -> list[R | None]:
    """Line rows up with the requested keys, None where a key has no row."""
    rows_map = {key_of(row): row for row in rows}
    return [rows_map.get(key) for key in keys]


def key_many(keys: Sequence[K], rows: Iterable[R], key_of: Callable[[R], K]) -> list[list[R]]:
    """Group rows under the requested keys, [] where a key has no rows."""
    grouped: dict[K, list[R]] = defaultdict(list)
    for row in rows:
        grouped[key_of(row)].append(row)
    return [grouped.get(key, []) for key in keys]


async def load_users(gateway: DataGateway, keys: list[UUID]) -> list[UserRecord | None]:
    """Batch load users by ID."""
    logger.debug("Batch loading users", key_count=len(keys))
    users = await gateway.find_users_by_ids(keys)
    return key_one(keys, users, lambda user: user.id)


async def load_profiles(gateway: DataGateway, keys: list[UUID]) -> list[ProfileRecord | None]:
    """Batch load profiles by ID."""
    logger.debug("Batch loading profiles", key_count=len(keys))
    profiles = await gateway.find_profiles_by_ids(keys)
    return key_one(keys, profiles, lambda profile: profile.id)


async def load_profiles_by_user(
    gateway: DataGateway, keys: list[UUID]
) -> list[ProfileRecord | None]:
    """Batch load profiles by owning user ID."""
    logger.debug("Batch loading profiles by user", key_count=len(keys))
    profiles = await gateway.find_profiles_by_user_ids(keys)
    return key_one(keys, profiles, lambda profile: profile.user_id)


async def load_posts(gateway: DataGateway, keys: list[UUID]) -> list[PostRecord | None]:
    """Batch load posts by ID."""
    logger.debug("Batch loading posts", key_count=len(keys))
    posts = await gateway.find_posts_by_ids(keys)
    return key_one(keys, posts, lambda post: post.id)


async def load_posts_by_author(gateway: DataGateway, keys: list[UUID]) -> list[list[PostRecord]]:
    """Batch load the posts written by each author."""
    logger.debug("Batch loading posts by author", key_count=len(keys))
    posts = await gateway.find_posts_by_author_ids(keys)
    return key_many(keys, posts, lambda post: post.author_id)


async def load_member_types(
    gateway: DataGateway, keys: list[str]
) -> list[MemberTypeRecord | None]:
    """Batch load member types by ID."""
    logger.debug("Batch loading member types", key_count=len(keys))
    member_types = await gateway.find_member_types_by_ids(keys)
    return key_one(keys, member_types, lambda member_type: member_type.id)


async def load_subscriptions_by_subscriber(
    gateway: DataGateway, keys: list[UUID]
) -> list[list[SubscriptionRecord]]:
    """Batch load the outgoing subscription edges of each user."""
    logger.debug("Batch loading subscriptions by subscriber", key_count=len(keys))
    edges = await gateway.find_subscriptions_by_subscriber_ids(keys)
    return key_many(keys, edges, lambda edge: edge.subscriber_id)


async def load_subscriptions_by_author(
    gateway: DataGateway, keys: list[UUID]
) -> list[list[SubscriptionRecord]]:
    """Batch load the incoming subscription edges of each user."""
    logger.debug("Batch loading subscriptions by author", key_count=len(keys))
    edges = await gateway.find_subscriptions_by_author_ids(keys)
    return key_many(keys, edges, lambda edge: edge.author_id)


class Loaders:
    def __init__(self, gateway: DataGateway):
        self.user_by_id: DataLoader[UUID, UserRecord | None] = DataLoader(
            load_fn=partial(load_users, gateway)
        )
        self.profile_by_id: DataLoader[UUID, ProfileRecord | None] = DataLoader(
            load_fn=partial(load_profiles, gateway)
        )
        self.profile_by_user_id: DataLoader[UUID, ProfileRecord | None] = DataLoader(
            load_fn=partial(load_profiles_by_user, gateway)
        )
        self.post_by_id: DataLoader[UUID, PostRecord | None] = DataLoader(
            load_fn=partial(load_posts, gateway)
        )
        self.posts_by_author_id: DataLoader[UUID, list[PostRecord]] = DataLoader(
            load_fn=partial(load_posts_by_author, gateway)
        )
        self.member_type_by_id: DataLoader[str, MemberTypeRecord | None] = DataLoader(
            load_fn=partial(load_member_types, gateway)
        )
        self.subscriptions_by_subscriber_id: DataLoader[UUID, list[SubscriptionRecord]] = (
            DataLoader(load_fn=partial(load_subscriptions_by_subscriber, gateway))
        )
        self.subscriptions_by_author_id: DataLoader[UUID, list[SubscriptionRecord]] = (
            DataLoader(load_fn=partial(load_subscriptions_by_author, gateway))
        )

    def prime_users(self, users: Iterable[UserRecord]) -> None:
        """Seed the user cache with rows fetched outside a batch."""
        self.user_by_id.prime_many({user.id: user for user in users})

    def prime_profiles(self, profiles: Iterable[ProfileRecord]) -> None:
        profiles = list(profiles)
        self.profile_by_id.prime_many({profile.id: profile for profile in profiles})
        self.profile_by_user_id.prime_many({profile.user_id: profile for profile in profiles})

    def prime_posts(self, posts: Iterable[PostRecord]) -> None:
        self.post_by_id.prime_many({post.id: post for post in posts})

    def prime_member_types(self, member_types: Iterable[MemberTypeRecord]) -> None:
        self.member_type_by_id.prime_many(
            {member_type.id: member_type for member_type in member_types}
        )
