"""Tests for endpoint, verb and operation building."""

from __future__ import annotations

import pytest
from fastapi.openapi.models import Operation, PathItem

from functions_openapi.exceptions import InvalidOperationError
from functions_openapi.markers import (
    FunctionName,
    HttpTrigger,
    MarkerKind,
    OpenApiOperation,
)
from functions_openapi.metadata import HandlerDescriptor
from functions_openapi.operations import (
    OperationType,
    get_http_endpoint,
    get_http_verb,
    get_operation,
    get_path_item,
    set_operation,
)


def _handler(*markers: OpenApiOperation) -> HandlerDescriptor:
    table = {MarkerKind.OPERATION: markers} if markers else {}
    return HandlerDescriptor(name="handler", func=lambda: None, markers=table)


class TestGetHttpEndpoint:
    def test_route_trimmed_and_prefixed(self) -> None:
        endpoint = get_http_endpoint(
            FunctionName("ignored"), HttpTrigger(route="/foo/bar/")
        )
        assert endpoint == "/foo/bar"

    def test_blank_route_falls_back_to_function_name(self) -> None:
        assert get_http_endpoint(FunctionName("baz"), HttpTrigger(route="   ")) == "/baz"

    def test_missing_route_falls_back_to_function_name(self) -> None:
        assert get_http_endpoint(FunctionName("baz"), HttpTrigger()) == "/baz"

    def test_route_template_kept(self) -> None:
        endpoint = get_http_endpoint(FunctionName("f"), HttpTrigger(route="pet/{petId}"))
        assert endpoint == "/pet/{petId}"

    def test_repeated_slashes_collapsed_at_edges(self) -> None:
        assert get_http_endpoint(FunctionName("f"), HttpTrigger(route="//a//")) == "/a"


class TestGetHttpVerb:
    def test_first_method_only(self) -> None:
        assert get_http_verb(HttpTrigger(methods=["get", "POST"])) is OperationType.GET

    def test_case_insensitive(self) -> None:
        assert get_http_verb(HttpTrigger(methods=["PaTcH"])) is OperationType.PATCH

    @pytest.mark.parametrize("verb", list(OperationType))
    def test_every_verb_parses(self, verb: OperationType) -> None:
        assert get_http_verb(HttpTrigger(methods=[verb.value])) is verb

    def test_unknown_method(self) -> None:
        with pytest.raises(InvalidOperationError) as exc_info:
            get_http_verb(HttpTrigger(methods=["bogus"]))
        assert exc_info.value.method == "bogus"

    def test_no_methods(self) -> None:
        with pytest.raises(InvalidOperationError):
            get_http_verb(HttpTrigger())

    def test_label(self) -> None:
        assert OperationType.GET.label == "Get"
        assert OperationType.OPTIONS.label == "Options"


class TestPathItems:
    def test_creates_missing_item(self) -> None:
        paths: dict[str, PathItem] = {}
        item = get_path_item("/pets", paths)
        assert isinstance(item, PathItem)
        assert paths == {}

    def test_reuses_existing_item(self) -> None:
        existing = PathItem()
        assert get_path_item("/pets", {"/pets": existing}) is existing

    def test_set_operation_keeps_other_verbs(self) -> None:
        item = PathItem()
        get_op = Operation(operationId="list")
        post_op = Operation(operationId="create")
        assert set_operation(item, OperationType.GET, get_op) is None
        assert set_operation(item, OperationType.POST, post_op) is None
        assert item.get is get_op
        assert item.post is post_op

    def test_set_operation_returns_replaced(self) -> None:
        item = PathItem()
        first = Operation(operationId="first")
        set_operation(item, OperationType.GET, first)
        assert set_operation(item, OperationType.GET, Operation()) is first


class TestGetOperation:
    def test_explicit_operation_id(self) -> None:
        handler = _handler(OpenApiOperation(operation_id="listPets"))
        operation = get_operation(handler, FunctionName("ListPets"), OperationType.GET)
        assert operation.operationId == "listPets"

    def test_blank_operation_id_synthesized(self) -> None:
        handler = _handler(OpenApiOperation(operation_id="  "))
        operation = get_operation(handler, FunctionName("ListPets"), OperationType.GET)
        assert operation.operationId == "ListPets_Get"

    def test_without_operation_marker(self) -> None:
        operation = get_operation(_handler(), FunctionName("AddPet"), OperationType.POST)
        assert operation.operationId == "AddPet_Post"
        assert operation.tags == []

    def test_tags_copied(self) -> None:
        handler = _handler(OpenApiOperation(tags=["pet", "store"]))
        operation = get_operation(handler, FunctionName("f"), OperationType.GET)
        assert operation.tags == ["pet", "store"]

    def test_summary_and_description(self) -> None:
        handler = _handler(OpenApiOperation(summary="Short", description="Long"))
        operation = get_operation(handler, FunctionName("f"), OperationType.GET)
        assert operation.summary == "Short"
        assert operation.description == "Long"
