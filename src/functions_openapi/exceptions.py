"""OpenApiError hierarchy for document generation failures."""

from __future__ import annotations


class OpenApiError(Exception):
    """Base for all document generation errors."""


class ConfigurationError(OpenApiError):
    """A handler is missing a required marker or declares inconsistent ones."""

    def __init__(
        self,
        detail: str,
        *,
        handler: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.handler = handler
        self.cause = cause


class InvalidOperationError(OpenApiError):
    """A declared HTTP method does not map to any operation type."""

    def __init__(self, detail: str, *, method: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.method = method
