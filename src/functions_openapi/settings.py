"""Document metadata and generation options."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from fastapi.openapi.models import Info

# Application setting keys, as the functions host exposes them
_ENV_KEYS = {
    "OpenApi__Info__Title": "title",
    "OpenApi__Info__Version": "version",
    "OpenApi__Info__Description": "description",
    "OpenApi__Version": "openapi_version",
    "OpenApi__RoutePrefix": "route_prefix",
}


@dataclass
class OpenApiSettings:
    title: str = "OpenAPI Document on Azure Functions"
    version: str = "1.0.0"
    description: str | None = None
    openapi_version: str = "3.1.0"
    route_prefix: str = "api"
    skip_invalid: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OpenApiSettings:
        """Create settings from a mapping, ignoring unknown and private keys."""
        names = {f.name for f in fields(cls)}
        return cls(
            **{k: v for k, v in data.items() if not k.startswith("_") and k in names}
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> OpenApiSettings:
        environ = os.environ if environ is None else environ
        return cls.from_dict(
            {name: environ[key] for key, name in _ENV_KEYS.items() if key in environ}
        )

    def info(self) -> Info:
        return Info(title=self.title, version=self.version, description=self.description)
