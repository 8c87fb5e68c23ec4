"""
Memberhub backend
GraphQL API over users, profiles, posts and membership tiers
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
