from __future__ import annotations

from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_gateway, get_loaders
from ..types.post import Post

logger = get_logger(__name__)


async def resolve_posts(info: strawberry.Info) -> list[Post | None]:
    posts = await get_gateway(info).find_posts()
    get_loaders(info).prime_posts(posts)
    return [Post.from_record(post) for post in posts]


async def resolve_post_by_id(info: strawberry.Info, id: UUID) -> Post | None:
    post = await get_loaders(info).post_by_id.load(id)
    if post is None:
        logger.info("Post not found", post_id=str(id))
        return None
    return Post.from_record(post)
