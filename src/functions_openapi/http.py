"""Serves the generated document over HTTP."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from starlette.requests import Request
from starlette.responses import Response

from functions_openapi.document import Document, OpenApiFormat
from functions_openapi.exceptions import OpenApiError
from functions_openapi.metadata import MarkerSource
from functions_openapi.settings import OpenApiSettings

logger = logging.getLogger(__name__)


def openapi_router(
    source: MarkerSource, settings: OpenApiSettings | None = None
) -> APIRouter:
    """Return a router rendering ``/swagger.json`` and ``/swagger.yaml``.

    Every request runs a full generation pass over ``source``.
    """
    settings = settings or OpenApiSettings()
    router = APIRouter()

    @router.get("/swagger.{extension}", include_in_schema=False)
    async def render_swagger_document(request: Request, extension: str) -> Response:
        try:
            fmt = OpenApiFormat.from_extension(extension)
        except ValueError:
            raise HTTPException(
                status_code=404, detail=f"Unsupported document format: {extension}"
            ) from None

        try:
            document = Document(settings).add_server(str(request.base_url)).build(source)
            content = document.render(fmt)
        except OpenApiError as exc:
            logger.error("OpenAPI document generation failed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        return Response(content=content, media_type=fmt.media_type)

    return router
