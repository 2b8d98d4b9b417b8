"""Shared pytest fixtures for functions-openapi tests."""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pytest

from functions_openapi.metadata import HandlerCollection

APPS_DIR = Path(__file__).parent / "apps"


@pytest.fixture(scope="session")
def petstore() -> Iterator[ModuleType]:
    """The sample function app, imported from tests/apps/petstore.py.

    Registered in ``sys.modules`` as a regular import would be, for the
    session only.
    """
    spec = importlib.util.spec_from_file_location("petstore", APPS_DIR / "petstore.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    with pytest.MonkeyPatch.context() as mp:
        mp.setitem(sys.modules, "petstore", module)
        spec.loader.exec_module(module)
        yield module


@pytest.fixture
def petstore_source(petstore: ModuleType) -> HandlerCollection:
    """Handler collection scanned from the sample function app."""
    return HandlerCollection.from_module(petstore)
