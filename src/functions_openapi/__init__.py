"""Functions OpenAPI - OpenAPI documents from annotated HTTP-triggered handlers."""

from functions_openapi.discovery import (
    get_function_name,
    get_http_trigger,
    get_http_trigger_methods,
)
from functions_openapi.document import (
    Document,
    DocumentFragments,
    OpenApiFormat,
    generate,
)
from functions_openapi.exceptions import (
    ConfigurationError,
    InvalidOperationError,
    OpenApiError,
)
from functions_openapi.http import openapi_router
from functions_openapi.markers import (
    AuthorizationLevel,
    FunctionName,
    HttpTrigger,
    Marker,
    MarkerKind,
    OpenApiIgnore,
    OpenApiOperation,
    OpenApiParameter,
    OpenApiRequestBody,
    OpenApiResponseBody,
    ParameterLocation,
)
from functions_openapi.metadata import (
    HandlerCollection,
    HandlerDescriptor,
    MarkerSource,
    ParameterDescriptor,
)
from functions_openapi.operations import (
    OperationType,
    get_http_endpoint,
    get_http_verb,
    get_operation,
    get_path_item,
)
from functions_openapi.parameters import (
    get_parameters,
    get_request_body,
    get_responses,
)
from functions_openapi.schemas import get_schemas, get_security_schemes
from functions_openapi.settings import OpenApiSettings

__all__ = [
    "AuthorizationLevel",
    "ConfigurationError",
    "Document",
    "DocumentFragments",
    "FunctionName",
    "HandlerCollection",
    "HandlerDescriptor",
    "HttpTrigger",
    "InvalidOperationError",
    "Marker",
    "MarkerKind",
    "MarkerSource",
    "OpenApiError",
    "OpenApiFormat",
    "OpenApiIgnore",
    "OpenApiOperation",
    "OpenApiParameter",
    "OpenApiRequestBody",
    "OpenApiResponseBody",
    "OpenApiSettings",
    "OperationType",
    "ParameterDescriptor",
    "ParameterLocation",
    "generate",
    "get_function_name",
    "get_http_endpoint",
    "get_http_trigger",
    "get_http_trigger_methods",
    "get_http_verb",
    "get_operation",
    "get_parameters",
    "get_path_item",
    "get_request_body",
    "get_responses",
    "get_schemas",
    "get_security_schemes",
    "openapi_router",
]
