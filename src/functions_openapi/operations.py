"""Path and operation building: endpoint, verb, path item and operation."""

from __future__ import annotations

from enum import Enum
from typing import cast

from fastapi.openapi.models import Operation, PathItem

from functions_openapi._types import PathTable
from functions_openapi.exceptions import InvalidOperationError
from functions_openapi.markers import (
    FunctionName,
    HttpTrigger,
    MarkerKind,
    OpenApiOperation,
)
from functions_openapi.metadata import HandlerDescriptor


class OperationType(Enum):
    """HTTP verbs an operation can be documented under.

    Values are the matching ``PathItem`` field names.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, method: str) -> OperationType:
        try:
            return cls[method.strip().upper()]
        except KeyError:
            raise InvalidOperationError(
                f"Unsupported HTTP method: {method!r}", method=method
            ) from None


def get_http_endpoint(function: FunctionName, trigger: HttpTrigger) -> str:
    """Return the URL path: the trigger route if set, else the function name."""
    route = trigger.route if trigger.route and trigger.route.strip() else function.name
    return f"/{route.strip('/')}"


def get_http_verb(trigger: HttpTrigger) -> OperationType:
    # Only the first declared method is documented
    if not trigger.methods:
        raise InvalidOperationError("HTTP trigger declares no methods")
    return OperationType.parse(trigger.methods[0])


def get_path_item(path: str, paths: PathTable) -> PathItem:
    return paths[path] if path in paths else PathItem()


def set_operation(
    item: PathItem, verb: OperationType, operation: Operation
) -> Operation | None:
    """Place ``operation`` on ``item`` under ``verb``, returning any it replaced."""
    previous = cast("Operation | None", getattr(item, verb.value))
    setattr(item, verb.value, operation)
    return previous


def get_operation(
    handler: HandlerDescriptor, function: FunctionName, verb: OperationType
) -> Operation:
    marker = cast("OpenApiOperation | None", handler.get_marker(MarkerKind.OPERATION))

    operation_id = f"{function.name}_{verb.label}"
    if marker is not None and marker.operation_id and marker.operation_id.strip():
        operation_id = marker.operation_id

    return Operation(
        operationId=operation_id,
        tags=list(marker.tags) if marker is not None else [],
        summary=marker.summary if marker is not None else None,
        description=marker.description if marker is not None else None,
    )
