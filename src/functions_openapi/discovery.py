"""Handler discovery and trigger/identity resolution."""

from __future__ import annotations

from typing import cast

from functions_openapi.exceptions import ConfigurationError
from functions_openapi.markers import FunctionName, HttpTrigger, MarkerKind
from functions_openapi.metadata import HandlerDescriptor, MarkerSource


def is_http_trigger_method(handler: HandlerDescriptor) -> bool:
    return (
        handler.has_marker(MarkerKind.FUNCTION_NAME)
        and not handler.has_marker(MarkerKind.IGNORE)
        and handler.find_parameter_marker(MarkerKind.HTTP_TRIGGER) is not None
    )


def get_http_trigger_methods(source: MarkerSource) -> list[HandlerDescriptor]:
    """Return the documentable handlers of ``source``, in source order.

    A handler qualifies when it is named with ``FunctionName``, is not
    marked ``OpenApiIgnore``, and one of its parameters carries an
    ``HttpTrigger``.
    """
    return [h for h in source.handlers() if is_http_trigger_method(h)]


def get_http_trigger(handler: HandlerDescriptor) -> HttpTrigger:
    trigger = handler.find_parameter_marker(MarkerKind.HTTP_TRIGGER)
    if trigger is None:
        raise ConfigurationError(
            f"No valid HTTP trigger on {handler.name}", handler=handler.name
        )
    return cast(HttpTrigger, trigger)


def get_function_name(handler: HandlerDescriptor) -> FunctionName:
    function = handler.get_marker(MarkerKind.FUNCTION_NAME)
    if function is None:
        raise ConfigurationError(
            f"No function name on {handler.name}", handler=handler.name
        )
    return cast(FunctionName, function)
