"""
Basic usage example of functions-openapi.

Demonstrates:
- Declaring handlers with markers
- Scanning a module into a handler collection
- Rendering the generated document as YAML
"""

import sys
from typing import Annotated, Optional

from pydantic import BaseModel
from starlette.requests import Request

from functions_openapi import (
    AuthorizationLevel,
    Document,
    FunctionName,
    HandlerCollection,
    HttpTrigger,
    OpenApiFormat,
    OpenApiOperation,
    OpenApiParameter,
    OpenApiRequestBody,
    OpenApiResponseBody,
    ParameterLocation,
)


class Todo(BaseModel):
    id: int
    title: str
    done: bool = False
    notes: Optional[str] = None


@FunctionName("ListTodos")
@OpenApiOperation(operation_id="listTodos", tags=["todo"])
@OpenApiParameter("done", type=bool, description="Filter by completion")
@OpenApiResponseBody(200, "application/json", Todo)
def list_todos(
    req: Annotated[
        Request,
        HttpTrigger(methods=["get"], route="todos", auth_level=AuthorizationLevel.ANONYMOUS),
    ],
):
    """Handlers are never executed by the generator."""


@FunctionName("CreateTodo")
@OpenApiOperation(tags=["todo"])
@OpenApiRequestBody("application/json", Todo, required=True)
@OpenApiResponseBody(201, "application/json", Todo)
def create_todo(req: Annotated[Request, HttpTrigger(methods=["post"], route="todos")]):
    pass


@FunctionName("GetTodo")
@OpenApiParameter("id", in_=ParameterLocation.PATH, type=int, required=True)
@OpenApiResponseBody(200, "application/json", Todo)
def get_todo(req: Annotated[Request, HttpTrigger(methods=["get"], route="todos/{id}")]):
    pass


if __name__ == "__main__":
    source = HandlerCollection.from_module(sys.modules[__name__])
    document = Document().add_server("http://localhost:7071").build(source)
    print(document.render(OpenApiFormat.YAML))

    # /todos gets both GET (listTodos) and POST (CreateTodo_Post);
    # CreateTodo and GetTodo carry the optional `code` query parameter
