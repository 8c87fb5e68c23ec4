"""
MemberType GraphQL type definitions
"""

from enum import Enum

import strawberry

from ...gateway import MemberTypeRecord


@strawberry.enum
class MemberTypeId(Enum):
    """Membership tier identifier."""

    BASIC = "BASIC"
    BUSINESS = "BUSINESS"


@strawberry.type
class MemberType:
    """Membership tier for GraphQL API."""

    id: MemberTypeId
    discount: float
    posts_limit_per_month: int

    @classmethod
    def from_record(cls, record: MemberTypeRecord) -> "MemberType":
        return cls(
            id=MemberTypeId(record.id),
            discount=record.discount,
            posts_limit_per_month=record.posts_limit_per_month,
        )
