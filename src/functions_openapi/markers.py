"""Declarative markers attached to HTTP-triggered handlers.

Method-level markers are decorators::

    @FunctionName("AddPet")
    @OpenApiRequestBody("application/json", Pet)
    @OpenApiResponseBody(200, "application/json", Pet)
    def add_pet(req: Annotated[Request, HttpTrigger(methods=["post"], route="pets")]):
        ...

The HTTP trigger is a parameter-level marker carried in ``Annotated`` metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeVar

MARKERS_ATTRIBUTE = "__openapi_markers__"

F = TypeVar("F")


class MarkerKind(Enum):
    """Kinds of marker a handler or one of its parameters can carry."""

    FUNCTION_NAME = "function_name"
    IGNORE = "ignore"
    HTTP_TRIGGER = "http_trigger"
    OPERATION = "operation"
    PARAMETER = "parameter"
    REQUEST_BODY = "request_body"
    RESPONSE_BODY = "response_body"

    @property
    def repeatable(self) -> bool:
        return self in (
            MarkerKind.PARAMETER,
            MarkerKind.REQUEST_BODY,
            MarkerKind.RESPONSE_BODY,
        )


class AuthorizationLevel(Enum):
    """Key required by the functions host to invoke a handler."""

    ANONYMOUS = "anonymous"
    USER = "user"
    FUNCTION = "function"
    SYSTEM = "system"
    ADMIN = "admin"


class ParameterLocation(Enum):
    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class Marker:
    """Base for all markers. Subclasses declare which kind they are."""

    kind: ClassVar[MarkerKind]


class MethodMarker(Marker):
    """Marker applied to the handler itself by decorating it."""

    def __call__(self, func: F) -> F:
        target: Any = getattr(func, "__func__", func)
        markers = target.__dict__.setdefault(MARKERS_ATTRIBUTE, [])
        # Decorators run bottom-up; prepend to keep source order
        markers.insert(0, self)
        return func


@dataclass(frozen=True)
class FunctionName(MethodMarker):
    """Name the host invokes the handler by."""

    kind = MarkerKind.FUNCTION_NAME

    name: str


@dataclass(frozen=True)
class OpenApiIgnore(MethodMarker):
    """Exclude a handler from the generated document."""

    kind = MarkerKind.IGNORE


@dataclass(frozen=True)
class HttpTrigger(Marker):
    """HTTP invocation settings, attached to the request parameter."""

    kind = MarkerKind.HTTP_TRIGGER

    methods: tuple[str, ...] = ()
    route: str | None = None
    auth_level: AuthorizationLevel = AuthorizationLevel.FUNCTION

    def __post_init__(self) -> None:
        methods = (self.methods,) if isinstance(self.methods, str) else self.methods
        object.__setattr__(self, "methods", tuple(methods))
        object.__setattr__(self, "auth_level", AuthorizationLevel(self.auth_level))


@dataclass(frozen=True)
class OpenApiOperation(MethodMarker):
    kind = MarkerKind.OPERATION

    operation_id: str | None = None
    tags: tuple[str, ...] = ()
    summary: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        tags = (self.tags,) if isinstance(self.tags, str) else self.tags
        object.__setattr__(self, "tags", tuple(tags))


@dataclass(frozen=True)
class OpenApiParameter(MethodMarker):
    """Query, header, path or cookie parameter of the operation."""

    kind = MarkerKind.PARAMETER

    name: str
    in_: ParameterLocation = ParameterLocation.QUERY
    type: Any = str
    required: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "in_", ParameterLocation(self.in_))


@dataclass(frozen=True)
class OpenApiRequestBody(MethodMarker):
    kind = MarkerKind.REQUEST_BODY

    content_type: str
    body_type: Any
    required: bool = False
    description: str | None = None


@dataclass(frozen=True)
class OpenApiResponseBody(MethodMarker):
    kind = MarkerKind.RESPONSE_BODY

    status_code: int
    content_type: str
    body_type: Any
    description: str | None = None
