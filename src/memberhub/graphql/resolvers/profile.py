from __future__ import annotations

from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_gateway, get_loaders
from ..errors import MemberTypeNotFoundError
from ..types.member_type import MemberType
from ..types.profile import Profile

logger = get_logger(__name__)


async def resolve_profiles(info: strawberry.Info) -> list[Profile | None]:
    profiles = await get_gateway(info).find_profiles()
    get_loaders(info).prime_profiles(profiles)
    return [Profile.from_record(profile) for profile in profiles]


async def resolve_profile_by_id(info: strawberry.Info, id: UUID) -> Profile | None:
    profile = await get_loaders(info).profile_by_id.load(id)
    if profile is None:
        logger.info("Profile not found", profile_id=str(id))
        return None
    return Profile.from_record(profile)


async def resolve_profile_member_type(profile: Profile, info: strawberry.Info) -> MemberType:
    """
    Resolve the member type of a profile.

    A profile must always reference an existing member type, so a missing one
    is an error rather than null.
    """
    member_type_id = profile.member_type_key
    member_type = await get_loaders(info).member_type_by_id.load(member_type_id)
    if member_type is None:
        logger.error(
            "Member type not found for profile",
            profile_id=str(profile.id),
            member_type_id=member_type_id,
        )
        raise MemberTypeNotFoundError(member_type_id, profile.id)
    return MemberType.from_record(member_type)
