"""Parameter, request body and response building."""

from __future__ import annotations

from typing import Any, cast

from fastapi.openapi.models import MediaType, Parameter, RequestBody, Response

from functions_openapi.exceptions import ConfigurationError
from functions_openapi.markers import (
    AuthorizationLevel,
    HttpTrigger,
    MarkerKind,
    OpenApiParameter,
    OpenApiRequestBody,
    OpenApiResponseBody,
    ParameterLocation,
)
from functions_openapi.metadata import HandlerDescriptor
from functions_openapi.schemas import schema_for_type, schema_reference, type_name

FUNCTION_KEY_PARAMETER = "code"


def _parameter(
    name: str,
    location: ParameterLocation,
    tp: Any,
    *,
    required: bool,
    description: str | None = None,
) -> Parameter:
    schema, _ = schema_for_type(tp)
    return Parameter.model_validate(
        {
            "name": name,
            "in": location.value,
            "required": required,
            "description": description,
            "schema": schema,
        }
    )


def _media_type(body_type: Any) -> MediaType:
    return MediaType.model_validate({"schema": schema_reference(body_type)})


def get_parameters(handler: HandlerDescriptor, trigger: HttpTrigger) -> list[Parameter]:
    """Return the declared parameters, then the function key when one is required."""
    markers = cast(
        "tuple[OpenApiParameter, ...]", handler.get_markers(MarkerKind.PARAMETER)
    )
    parameters = [
        _parameter(
            m.name, m.in_, m.type, required=m.required, description=m.description
        )
        for m in markers
    ]

    if trigger.auth_level is not AuthorizationLevel.ANONYMOUS:
        parameters.append(
            _parameter(FUNCTION_KEY_PARAMETER, ParameterLocation.QUERY, str, required=False)
        )

    return parameters


def get_request_body(handler: HandlerDescriptor) -> RequestBody | None:
    """Return the request body keyed by content type, or ``None`` without markers."""
    markers = cast(
        "tuple[OpenApiRequestBody, ...]", handler.get_markers(MarkerKind.REQUEST_BODY)
    )
    if not markers:
        return None

    content: dict[str, MediaType] = {}
    for marker in markers:
        if marker.content_type in content:
            raise ConfigurationError(
                f"Duplicate request body content type {marker.content_type!r}"
                f" on {handler.name}",
                handler=handler.name,
            )
        content[marker.content_type] = _media_type(marker.body_type)

    description = next((m.description for m in markers if m.description), None)
    return RequestBody(
        content=content,
        description=description,
        required=any(m.required for m in markers),
    )


def get_responses(handler: HandlerDescriptor) -> dict[str, Response]:
    """Return responses keyed by status code. Present even when empty."""
    markers = cast(
        "tuple[OpenApiResponseBody, ...]", handler.get_markers(MarkerKind.RESPONSE_BODY)
    )

    responses: dict[str, Response] = {}
    for marker in markers:
        code = str(int(marker.status_code))
        if code in responses:
            raise ConfigurationError(
                f"Duplicate response status code {code} on {handler.name}",
                handler=handler.name,
            )
        responses[code] = Response(
            description=marker.description or f"Payload of {type_name(marker.body_type)}",
            content={marker.content_type: _media_type(marker.body_type)},
        )
    return responses
