"""
Request pipeline: parse, validate, depth-check, then execute against fresh loaders.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from inspect import isawaitable
from typing import Any

import strawberry
from graphql import (
    DocumentNode,
    GraphQLError,
    execute,
    get_operation_ast,
    parse,
    specified_rules,
    validate,
)
from graphql.execution.values import get_variable_values
from strawberry.extensions.query_depth_limiter import create_validator

from ..config import settings
from ..gateway import DataGateway
from ..logging import get_logger
from .context import build_context

logger = get_logger(__name__)


class PipelineState(Enum):
    RECEIVED = "received"
    PARSED = "parsed"
    DEPTH_CHECKED = "depth_checked"
    EXECUTED = "executed"
    RESPONDED = "responded"
    REJECTED = "rejected"


@dataclass
class PipelineResult:
    """Outcome of one request: the final state and the response envelope."""

    state: PipelineState
    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)
    executed: bool = False

    @property
    def envelope(self) -> dict[str, Any]:
        """The GraphQL result envelope; `data` is omitted for rejected requests."""
        response: dict[str, Any] = {}
        if self.executed:
            response["data"] = self.data
        if self.errors:
            response["errors"] = self.errors
        return response


class RequestPipeline:
    """Runs GraphQL requests against a schema and a data gateway.

    The pipeline itself is shared; each call to `execute` builds its own
    loaders, so no cached rows survive from one request to the next. The
    document is parsed and validated once here and executed as is.
    """

    def __init__(
        self,
        schema: strawberry.Schema,
        gateway: DataGateway,
        max_depth: int | None = None,
    ):
        self.schema = schema
        self.gateway = gateway
        self.max_depth = settings.max_query_depth if max_depth is None else max_depth
        # Runs only on documents the standard rules accept, so every spread resolves
        self.depth_rule = create_validator(self.max_depth, None, None)

    def _reject(self, failed: PipelineState, errors: Sequence[GraphQLError]) -> PipelineResult:
        """Reject a request; `failed` is the step whose check did not pass."""
        logger.info(
            "GraphQL request rejected",
            stage=failed.value,
            errors=[error.message for error in errors],
        )
        return PipelineResult(
            state=PipelineState.REJECTED,
            errors=[error.formatted for error in errors],
        )

    def _request_errors(
        self,
        document: DocumentNode,
        variables: dict[str, Any] | None,
        operation_name: str | None,
    ) -> list[GraphQLError]:
        """Errors in the operation choice or variables, found without executing."""
        operation = get_operation_ast(document, operation_name)
        if operation is None:
            if operation_name:
                return [GraphQLError(f"Unknown operation named '{operation_name}'.")]
            return [
                GraphQLError("Must provide operation name if query contains multiple operations.")
            ]

        coerced = get_variable_values(
            self.schema._schema, operation.variable_definitions or (), variables or {}
        )
        return coerced if isinstance(coerced, list) else []

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        request: Any = None,
    ) -> PipelineResult:
        try:
            document = parse(query)
        except GraphQLError as error:
            return self._reject(PipelineState.PARSED, [error])

        validation_errors = validate(self.schema._schema, document, specified_rules)
        if not validation_errors:
            validation_errors = self._request_errors(document, variables, operation_name)
        if validation_errors:
            return self._reject(PipelineState.DEPTH_CHECKED, validation_errors)

        depth_errors = validate(self.schema._schema, document, [self.depth_rule])
        if depth_errors:
            return self._reject(PipelineState.DEPTH_CHECKED, depth_errors)

        context = build_context(self.gateway, request)
        result = execute(
            self.schema._schema,
            document,
            context_value=context,
            variable_values=variables,
            operation_name=operation_name,
        )
        if isawaitable(result):
            result = await result
        state = PipelineState.EXECUTED

        errors = [error.formatted for error in result.errors or []]
        if errors:
            logger.info(
                "GraphQL request resolved with errors", stage=state.value, error_count=len(errors)
            )

        state = PipelineState.RESPONDED
        return PipelineResult(state=state, data=result.data, errors=errors, executed=True)
