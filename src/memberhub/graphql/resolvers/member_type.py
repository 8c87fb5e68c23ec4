from __future__ import annotations

import strawberry

from ..context import get_gateway, get_loaders
from ..types.member_type import MemberType, MemberTypeId


async def resolve_member_types(info: strawberry.Info) -> list[MemberType | None]:
    member_types = await get_gateway(info).find_member_types()
    get_loaders(info).prime_member_types(member_types)
    return [MemberType.from_record(member_type) for member_type in member_types]


async def resolve_member_type_by_id(info: strawberry.Info, id: MemberTypeId) -> MemberType | None:
    member_type = await get_loaders(info).member_type_by_id.load(id.value)
    return MemberType.from_record(member_type) if member_type else None
