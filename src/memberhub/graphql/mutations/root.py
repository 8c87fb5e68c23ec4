"""
Root GraphQL mutation definitions
"""

from uuid import UUID

import strawberry

from ..types.user import User


# Input types for mutations
@strawberry.input
class CreateUserInput:
    """Input for creating a new user."""

    name: str
    balance: float


@strawberry.input
class ChangeUserInput:
    """Input for updating a user. Omitted fields are left unchanged."""

    name: str | None = None
    balance: float | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, input: CreateUserInput) -> User:
        """Create a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, input)

    @strawberry.mutation(name="changeUser")
    async def change_user(self, info: strawberry.Info, id: UUID, input: ChangeUserInput) -> User:
        """Update an existing user."""
        from ..resolvers.user import change_user

        return await change_user(info, id, input)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info, id: UUID) -> bool:
        """Delete a user along with its profile, posts and subscriptions."""
        from ..resolvers.user import delete_user

        return await delete_user(info, id)
