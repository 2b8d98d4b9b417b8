"""
Serving the document example of functions-openapi.

Demonstrates:
- Loading settings from the functions host environment
- Exposing /api/swagger.json and /api/swagger.yaml from a FastAPI app
"""

import sys
from typing import Annotated

from fastapi import FastAPI
from pydantic import BaseModel
from starlette.requests import Request

from functions_openapi import (
    FunctionName,
    HandlerCollection,
    HttpTrigger,
    OpenApiResponseBody,
    OpenApiSettings,
    openapi_router,
)


class Greeting(BaseModel):
    message: str


@FunctionName("Hello")
@OpenApiResponseBody(200, "application/json", Greeting)
def hello(req: Annotated[Request, HttpTrigger(methods=["get"], route="hello")]):
    pass


# OpenApi__Info__Title, OpenApi__Info__Version, ... override the defaults
settings = OpenApiSettings.from_env()
source = HandlerCollection.from_module(sys.modules[__name__])

app = FastAPI(title="Functions OpenAPI Example")
app.include_router(openapi_router(source, settings), prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=7071)

    # Test with:
    # curl http://localhost:7071/api/swagger.json
    # curl http://localhost:7071/api/swagger.yaml
