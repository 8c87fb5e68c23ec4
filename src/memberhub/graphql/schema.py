"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import APIRouter, Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from pydantic import BaseModel

from ..gateway import DataGateway
from ..logging import get_logger
from .mutations.root import Mutation
from .pipeline import RequestPipeline
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(query=Query, mutation=Mutation)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Introspection catches most type resolution issues
        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


class GraphQLRequestBody(BaseModel):
    """Body of a GraphQL POST request."""

    query: str
    variables: dict[str, Any] | None = None
    operationName: str | None = None


def create_graphql_router(gateway: DataGateway, max_depth: int | None = None) -> APIRouter:
    """Create the router serving GraphQL requests on `POST /`."""
    pipeline = RequestPipeline(schema, gateway, max_depth=max_depth)
    router = APIRouter()

    @router.post("/")
    async def graphql_endpoint(  # pyright: ignore [reportUnusedFunction]
        body: GraphQLRequestBody, request: Request
    ) -> dict[str, Any]:
        result = await pipeline.execute(
            body.query,
            variables=body.variables,
            operation_name=body.operationName,
            request=request,
        )
        return result.envelope

    return router
