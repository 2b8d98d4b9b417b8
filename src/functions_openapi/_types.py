"""Shared type aliases for the document tables."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Union

from fastapi.openapi.models import PathItem, Reference, Schema, SecurityScheme

# A handler is any plain function the host would invoke for an HTTP request
Handler = Callable[..., Any]

PathTable = dict[str, PathItem]
SchemaTable = dict[str, Union[Schema, Reference]]
SecuritySchemeTable = dict[str, Union[SecurityScheme, Reference]]
