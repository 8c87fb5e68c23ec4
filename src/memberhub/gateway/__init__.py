"""
Data access gateway: bulk reads and user writes against the store
"""

from .base import (
    DataGateway,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    SubscriptionRecord,
    UserRecord,
)
from .sql import SqlDataGateway

__all__ = [
    "DataGateway",
    "MemberTypeRecord",
    "PostRecord",
    "ProfileRecord",
    "SqlDataGateway",
    "SubscriptionRecord",
    "UserRecord",
]
