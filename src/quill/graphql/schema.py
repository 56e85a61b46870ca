"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..logging import get_logger
from .loaders import Loaders
from .mutations.root import Mutation
from .queries.root import Query
from .types.post import Post
from .types.type import Type
from .types.user import User

logger = get_logger(__name__)

# Every object type the API exposes; relation fields point at each other lazily
SCHEMA_TYPES: list[type] = [Post, Type, User]


def create_schema(
    query: type = Query,
    mutation: type | None = Mutation,
    types: list[type] | None = None,
) -> strawberry.Schema:
    """Assemble the schema from its root operations and object types."""
    return strawberry.Schema(
        query=query,
        mutation=mutation,
        types=types if types is not None else SCHEMA_TYPES,
    )


schema = create_schema()


def validate_schema(target: strawberry.Schema | None = None) -> None:
    """Fail at startup when the schema is broken.

    Lazy references between Post, Type and User only resolve when the schema
    is introspected, so a bad one would otherwise surface on the first request.
    """
    graphql_schema = (target or schema)._schema

    problems = [str(e) for e in gql_validate_schema(graphql_schema)]
    if not problems:
        introspection = graphql_sync(graphql_schema, get_introspection_query())
        problems = [str(e) for e in introspection.errors or []]

    if problems:
        logger.error("GraphQL schema is invalid", errors=problems)
        raise RuntimeError(f"Invalid GraphQL schema: {'; '.join(problems)}")

    logger.info("GraphQL schema validated", types=[t.__name__ for t in SCHEMA_TYPES])


async def get_context(request: Request) -> dict[str, Any]:
    """Get the context for GraphQL resolvers. Loaders are scoped to one request."""
    return {
        "request": request,
        "loaders": Loaders(),
    }


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
    )
