from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_gateway, get_loaders
from ..errors import UserNotFoundError
from ..types.post import Post
from ..types.profile import Profile
from ..types.user import User

if TYPE_CHECKING:
    from ...gateway import SubscriptionRecord
    from ..mutations.root import ChangeUserInput, CreateUserInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User | None]:
    users = await get_gateway(info).find_users()
    get_loaders(info).prime_users(users)
    return [User.from_record(user) for user in users]


async def resolve_user_by_id(info: strawberry.Info, id: UUID) -> User | None:
    user = await get_loaders(info).user_by_id.load(id)
    if user is None:
        logger.info("User not found", user_id=str(id))
        return None
    return User.from_record(user)


# Field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    profile = await get_loaders(info).profile_by_user_id.load(user.id)
    return Profile.from_record(profile) if profile else None


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    posts = await get_loaders(info).posts_by_author_id.load(user.id)
    return [Post.from_record(post) for post in posts]


async def _load_users(info: strawberry.Info, user_ids: list[UUID]) -> list[User]:
    users = await get_loaders(info).user_by_id.load_many(user_ids)
    # Edges pointing at a vanished user are skipped
    return [User.from_record(user) for user in users if user is not None]


async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User]:
    """Resolve the authors this user subscribes to."""
    edges: list[SubscriptionRecord] = await get_loaders(
        info
    ).subscriptions_by_subscriber_id.load(user.id)
    return await _load_users(info, [edge.author_id for edge in edges])


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User]:
    """Resolve the subscribers of this user."""
    edges: list[SubscriptionRecord] = await get_loaders(info).subscriptions_by_author_id.load(
        user.id
    )
    return await _load_users(info, [edge.subscriber_id for edge in edges])


# Mutation resolvers
async def create_user(info: strawberry.Info, input: CreateUserInput) -> User:
    user = await get_gateway(info).create_user(name=input.name, balance=input.balance)
    return User.from_record(user)


async def change_user(info: strawberry.Info, id: UUID, input: ChangeUserInput) -> User:
    user = await get_gateway(info).update_user(id, name=input.name, balance=input.balance)
    if user is None:
        logger.info("User not found for update", user_id=str(id))
        raise UserNotFoundError(id)
    return User.from_record(user)


async def delete_user(info: strawberry.Info, id: UUID) -> bool:
    return await get_gateway(info).delete_user(id)
