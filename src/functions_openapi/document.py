"""Document assembly: runs a generation pass and renders the result."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import yaml
from fastapi.encoders import jsonable_encoder
from fastapi.openapi.models import Components, Info, OpenAPI, Operation, Server

from functions_openapi._types import PathTable, SchemaTable, SecuritySchemeTable
from functions_openapi.discovery import (
    get_function_name,
    get_http_trigger,
    get_http_trigger_methods,
)
from functions_openapi.exceptions import OpenApiError
from functions_openapi.metadata import HandlerDescriptor, MarkerSource
from functions_openapi.operations import (
    OperationType,
    get_http_endpoint,
    get_http_verb,
    get_operation,
    get_path_item,
    set_operation,
)
from functions_openapi.parameters import (
    get_parameters,
    get_request_body,
    get_responses,
)
from functions_openapi.schemas import get_schemas, get_security_schemes
from functions_openapi.settings import OpenApiSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentFragments:
    """Tables produced by one generation pass."""

    paths: PathTable
    schemas: SchemaTable
    security_schemes: SecuritySchemeTable


class OpenApiFormat(Enum):
    JSON = "json"
    YAML = "yaml"

    @property
    def media_type(self) -> str:
        return "application/json" if self is OpenApiFormat.JSON else "application/yaml"

    @classmethod
    def from_extension(cls, extension: str) -> OpenApiFormat:
        extension = extension.lower().lstrip(".")
        return cls.YAML if extension == "yml" else cls(extension)


def _build_operation(handler: HandlerDescriptor) -> tuple[str, OperationType, Operation]:
    trigger = get_http_trigger(handler)
    function = get_function_name(handler)
    path = get_http_endpoint(function, trigger)
    verb = get_http_verb(trigger)

    operation = get_operation(handler, function, verb)
    operation.parameters = get_parameters(handler, trigger)
    operation.requestBody = get_request_body(handler)
    operation.responses = get_responses(handler)
    return path, verb, operation


def generate(source: MarkerSource, *, skip_invalid: bool = False) -> DocumentFragments:
    """Run a full generation pass over ``source``.

    Errors raised for a handler propagate unless ``skip_invalid`` is set, in
    which case the handler is left out of the document with a warning.
    """
    handlers = get_http_trigger_methods(source)
    logger.debug("Discovered %d HTTP-triggered handlers", len(handlers))

    paths: PathTable = {}
    documented: list[HandlerDescriptor] = []
    for handler in handlers:
        try:
            path, verb, operation = _build_operation(handler)
        except OpenApiError as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping handler %s: %s", handler.name, exc)
            continue

        item = get_path_item(path, paths)
        if set_operation(item, verb, operation) is not None:
            logger.warning(
                "%s %s already documented, replaced by %s",
                verb.name,
                path,
                handler.name,
            )
        paths[path] = item
        documented.append(handler)

    return DocumentFragments(
        paths=paths,
        schemas=get_schemas(documented),
        security_schemes=get_security_schemes(),
    )


class Document:
    """Builder for a complete OpenAPI document.

    Usage::

        document = (
            Document(settings)
            .add_server("https://contoso.azurewebsites.net")
            .build(HandlerCollection.from_module(functions))
        )
        payload = document.render(OpenApiFormat.YAML)
    """

    def __init__(self, settings: OpenApiSettings | None = None) -> None:
        self._settings = settings or OpenApiSettings()
        self.initialise()

    def initialise(self) -> Document:
        self._info = self._settings.info()
        self._servers: list[Server] = []
        self._fragments: DocumentFragments | None = None
        return self

    def add_metadata(self, info: Info | Mapping[str, Any]) -> Document:
        self._info = info if isinstance(info, Info) else Info.model_validate(info)
        return self

    def add_server(self, base_url: str, route_prefix: str | None = None) -> Document:
        prefix = self._settings.route_prefix if route_prefix is None else route_prefix
        url = base_url.rstrip("/")
        if prefix.strip("/"):
            url = f"{url}/{prefix.strip('/')}"
        self._servers.append(Server(url=url))
        return self

    def build(self, source: MarkerSource, *, skip_invalid: bool | None = None) -> Document:
        if skip_invalid is None:
            skip_invalid = self._settings.skip_invalid
        self._fragments = generate(source, skip_invalid=skip_invalid)
        return self

    @property
    def fragments(self) -> DocumentFragments | None:
        return self._fragments

    def to_model(self) -> OpenAPI:
        fragments = self._fragments or DocumentFragments({}, {}, get_security_schemes())
        return OpenAPI(
            openapi=self._settings.openapi_version,
            info=self._info,
            servers=list(self._servers) or None,
            paths=dict(fragments.paths),
            components=Components(
                schemas=dict(fragments.schemas),
                securitySchemes=dict(fragments.security_schemes),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = jsonable_encoder(
            self.to_model(), by_alias=True, exclude_none=True
        )
        return result

    def render(self, fmt: OpenApiFormat = OpenApiFormat.JSON) -> str:
        data = self.to_dict()
        if fmt is OpenApiFormat.YAML:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return json.dumps(data, indent=2)
