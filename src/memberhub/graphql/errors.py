"""
Errors raised by resolvers and surfaced on the GraphQL error path
"""

from uuid import UUID


class MemberhubError(Exception):
    """Base class for resolver errors."""


class MemberTypeNotFoundError(MemberhubError):
    def __init__(self, member_type_id: str, profile_id: UUID):
        super().__init__(f"Member type {member_type_id} not found for profile {profile_id}")
        self.member_type_id = member_type_id
        self.profile_id = profile_id


class UserNotFoundError(MemberhubError):
    def __init__(self, user_id: UUID):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id
