"""
Shared request helpers for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import inspect

from ..auth.middleware import get_auth_context_optional
from ..logging import get_logger

if TYPE_CHECKING:
    from ..auth.context import AuthContext
    from .loaders import Loaders

logger = get_logger(__name__)


async def get_auth_context_from_info(info: strawberry.Info) -> "AuthContext | None":
    """
    Extract auth context from GraphQL info object.

    Returns None if request is not available.
    """
    request = info.context.get("request")
    if not request:
        logger.error("Request not found in GraphQL context")
        return None

    return await get_auth_context_optional(authorization=request.headers.get("authorization"))


def get_loaders(info: strawberry.Info) -> "Loaders":
    """Get the per-request DataLoaders, creating them if the context has none."""
    loaders = info.context.get("loaders")
    if loaders is None:
        from .loaders import Loaders

        loaders = Loaders()
        info.context["loaders"] = loaders
    return loaders


def is_preloaded(obj, attr_name: str) -> bool:
    """
    Check whether a relationship attribute was loaded with the row.

    Touching an unloaded relationship outside its session fails under
    asyncio, so callers fall back to a DataLoader instead.
    """
    if obj is None:
        return False
    return attr_name not in inspect(obj).unloaded
