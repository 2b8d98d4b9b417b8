"""Schema and security synthesis shared by every operation in the document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from fastapi.openapi.models import APIKey, Reference, Schema
from pydantic import PydanticUserError, TypeAdapter

from functions_openapi._types import SchemaTable, SecuritySchemeTable
from functions_openapi.exceptions import ConfigurationError
from functions_openapi.markers import MarkerKind
from functions_openapi.metadata import HandlerDescriptor

logger = logging.getLogger(__name__)

REF_PREFIX = "#/components/schemas/"
REF_TEMPLATE = REF_PREFIX + "{model}"

AUTH_KEY_SCHEME = "authKey"
FUNCTIONS_KEY_HEADER = "x-functions-key"


def type_name(tp: Any) -> str:
    """Simple name a body type is registered under in the schema table."""
    return getattr(tp, "__name__", None) or repr(tp)


def schema_reference(tp: Any) -> Reference:
    return Reference.model_validate({"$ref": f"{REF_PREFIX}{type_name(tp)}"})


def schema_for_type(tp: Any) -> tuple[dict[str, Any], dict[str, Any]]:
    """Derive the JSON schema of ``tp``.

    Returns the schema itself and the definitions of the models it nests,
    whose references point into ``#/components/schemas/``.
    """
    try:
        schema = TypeAdapter(tp).json_schema(ref_template=REF_TEMPLATE)
    except PydanticUserError as exc:
        raise ConfigurationError(
            f"Cannot derive a schema for {type_name(tp)}", cause=exc
        ) from exc

    definitions: dict[str, Any] = schema.pop("$defs", {})
    # Recursive models come back as a bare reference to their own definition
    ref = schema.get("$ref")
    if len(schema) == 1 and isinstance(ref, str) and ref.startswith(REF_PREFIX):
        schema = definitions.pop(ref[len(REF_PREFIX) :], schema)
    return schema, definitions


def _body_types(handlers: Iterable[HandlerDescriptor], kind: MarkerKind) -> list[Any]:
    return [marker.body_type for h in handlers for marker in h.get_markers(kind)]  # type: ignore[attr-defined]


def _parameter_types(handlers: Iterable[HandlerDescriptor]) -> list[Any]:
    return [marker.type for h in handlers for marker in h.get_markers(MarkerKind.PARAMETER)]  # type: ignore[attr-defined]


def get_schemas(handlers: Iterable[HandlerDescriptor]) -> SchemaTable:
    """Build the shared schema table for all request and response body types.

    Types are distinct by identity, request bodies before response bodies.
    Two distinct types with the same simple name share one entry: the later
    schema replaces the earlier one in place. Models and enums nested in body
    or parameter types are added after them, under their own names.
    """
    handlers = list(handlers)
    types = dict.fromkeys(
        _body_types(handlers, MarkerKind.REQUEST_BODY)
        + _body_types(handlers, MarkerKind.RESPONSE_BODY)
    )

    schemas: SchemaTable = {}
    nested: dict[str, Any] = {}
    for tp in types:
        schema, definitions = schema_for_type(tp)
        schemas[type_name(tp)] = Schema.model_validate(schema)
        nested.update(definitions)

    for tp in dict.fromkeys(_parameter_types(handlers)):
        nested.update(schema_for_type(tp)[1])

    for name, definition in nested.items():
        if name not in schemas:
            schemas[name] = Schema.model_validate(definition)

    logger.debug("Derived %d schemas from %d body types", len(schemas), len(types))
    return schemas


def get_security_schemes() -> SecuritySchemeTable:
    """Return the function key scheme. Constant, whatever the handlers declare."""
    scheme = APIKey.model_validate(
        {"type": "apiKey", "in": "header", "name": FUNCTIONS_KEY_HEADER}
    )
    return {AUTH_KEY_SCHEME: scheme}
