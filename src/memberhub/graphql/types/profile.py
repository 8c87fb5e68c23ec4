"""
Profile GraphQL type definitions
"""

from uuid import UUID

import strawberry

from ...gateway import ProfileRecord
from .member_type import MemberType, MemberTypeId


@strawberry.type
class Profile:
    """Profile type for GraphQL API."""

    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    # Stored member type key, resolved to the enum only when asked for
    member_type_key: strawberry.Private[str]

    @strawberry.field
    def member_type_id(self) -> MemberTypeId:
        return MemberTypeId(self.member_type_key)

    @strawberry.field
    async def member_type(self, info: strawberry.Info) -> MemberType:
        """Get the membership tier of this profile; fails if it does not exist."""
        from ..resolvers.profile import resolve_profile_member_type

        return await resolve_profile_member_type(self, info)

    @classmethod
    def from_record(cls, record: ProfileRecord) -> "Profile":
        return cls(
            id=record.id,
            is_male=record.is_male,
            year_of_birth=record.year_of_birth,
            user_id=record.user_id,
            member_type_key=record.member_type_id,
        )
