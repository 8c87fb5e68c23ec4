"""
Post GraphQL type definitions
"""

from uuid import UUID

import strawberry

from ...gateway import PostRecord


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: UUID
    title: str
    content: str
    author_id: UUID

    @classmethod
    def from_record(cls, record: PostRecord) -> "Post":
        return cls(
            id=record.id,
            title=record.title,
            content=record.content,
            author_id=record.author_id,
        )
