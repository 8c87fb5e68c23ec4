"""
Per-request GraphQL context
"""

from typing import Any

import strawberry

from ..gateway import DataGateway
from .loaders import Loaders


def build_context(gateway: DataGateway, request: Any = None) -> dict[str, Any]:
    """Build the context for one request around a fresh set of loaders."""
    return {
        "request": request,
        "gateway": gateway,
        "loaders": Loaders(gateway),
    }


def get_loaders(info: strawberry.Info) -> Loaders:
    return info.context["loaders"]


def get_gateway(info: strawberry.Info) -> DataGateway:
    return info.context["gateway"]
