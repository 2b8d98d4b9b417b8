"""Marker source: reflects over handlers once and answers marker queries."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from types import ModuleType
from typing import Annotated, Any, Protocol, get_origin, runtime_checkable

from functions_openapi._types import Handler
from functions_openapi.exceptions import ConfigurationError
from functions_openapi.markers import MARKERS_ATTRIBUTE, Marker, MarkerKind

logger = logging.getLogger(__name__)

MarkerTable = dict[MarkerKind, tuple[Marker, ...]]


def _index(markers: Iterable[Marker]) -> MarkerTable:
    table: dict[MarkerKind, list[Marker]] = {}
    for marker in markers:
        table.setdefault(marker.kind, []).append(marker)
    return {kind: tuple(found) for kind, found in table.items()}


def _annotated_markers(annotation: Any) -> tuple[Marker, ...]:
    if get_origin(annotation) is not Annotated:
        return ()
    return tuple(m for m in annotation.__metadata__ if isinstance(m, Marker))


class _MarkerLookup:
    markers: MarkerTable

    def has_marker(self, kind: MarkerKind) -> bool:
        return kind in self.markers

    def get_marker(self, kind: MarkerKind) -> Marker | None:
        found = self.markers.get(kind, ())
        return found[0] if found else None

    def get_markers(self, kind: MarkerKind) -> tuple[Marker, ...]:
        return self.markers.get(kind, ())


@dataclass(frozen=True)
class ParameterDescriptor(_MarkerLookup):
    name: str
    annotation: Any = inspect.Parameter.empty
    markers: MarkerTable = field(default_factory=dict)


@dataclass(frozen=True)
class HandlerDescriptor(_MarkerLookup):
    """Markers of one handler and its parameters, indexed by kind."""

    name: str
    func: Handler
    markers: MarkerTable = field(default_factory=dict)
    parameters: tuple[ParameterDescriptor, ...] = ()

    @classmethod
    def from_callable(cls, func: Any) -> HandlerDescriptor:
        func = getattr(func, "__func__", func)
        name = getattr(func, "__qualname__", repr(func))
        markers = _index(getattr(func, MARKERS_ATTRIBUTE, ()))
        signature = _signature(func, name, evaluate=bool(markers))
        parameters = tuple(
            ParameterDescriptor(
                name=p.name,
                annotation=p.annotation,
                markers=_index(_annotated_markers(p.annotation)),
            )
            for p in signature.parameters.values()
        )
        return cls(name=name, func=func, markers=markers, parameters=parameters)

    def find_parameter_marker(self, kind: MarkerKind) -> Marker | None:
        """Return the marker of the first parameter that carries one of ``kind``."""
        for parameter in self.parameters:
            marker = parameter.get_marker(kind)
            if marker is not None:
                return marker
        return None


def _signature(func: Handler, name: str, *, evaluate: bool) -> inspect.Signature:
    # String annotations are only evaluated on marked functions
    if not evaluate:
        return inspect.signature(func)
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        raise ConfigurationError(
            f"Cannot resolve parameter annotations of {name}",
            handler=name,
            cause=exc,
        ) from exc


@runtime_checkable
class MarkerSource(Protocol):
    """Pluggable source of handler metadata."""

    def handlers(self) -> Sequence[HandlerDescriptor]: ...


class HandlerCollection:
    """Immutable snapshot of handler descriptors, in discovery order."""

    def __init__(self, descriptors: Iterable[HandlerDescriptor] = ()) -> None:
        self._handlers = tuple(descriptors)

    def handlers(self) -> Sequence[HandlerDescriptor]:
        return self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[HandlerDescriptor]:
        return iter(self._handlers)

    @classmethod
    def from_callables(cls, *funcs: Handler) -> HandlerCollection:
        return cls(HandlerDescriptor.from_callable(f) for f in funcs)

    @classmethod
    def from_module(cls, module: ModuleType) -> HandlerCollection:
        """Collect functions defined in ``module``, including class bodies."""
        logger.debug("Scanning module %s for handlers", module.__name__)
        return cls(HandlerDescriptor.from_callable(f) for f in _module_functions(module))

    @classmethod
    def from_modules(cls, *modules: ModuleType) -> HandlerCollection:
        descriptors: list[HandlerDescriptor] = []
        for module in modules:
            descriptors.extend(cls.from_module(module))
        return cls(descriptors)

    @classmethod
    def from_package(cls, package: ModuleType) -> HandlerCollection:
        """Import every submodule of ``package`` and collect their handlers."""
        modules = [package]
        path = getattr(package, "__path__", None)
        if path is not None:
            for info in pkgutil.walk_packages(path, prefix=f"{package.__name__}."):
                modules.append(importlib.import_module(info.name))
        return cls.from_modules(*modules)


def _module_functions(module: ModuleType) -> Iterator[Handler]:
    seen: set[int] = set()
    for value in list(vars(module).values()):
        if getattr(value, "__module__", None) != module.__name__:
            continue
        if inspect.isfunction(value):
            candidates: Iterable[Any] = (value,)
        elif inspect.isclass(value):
            candidates = _class_functions(value)
        else:
            continue
        for func in candidates:
            if func.__module__ == module.__name__ and id(func) not in seen:
                seen.add(id(func))
                yield func


def _class_functions(klass: type) -> Iterator[Handler]:
    for value in vars(klass).values():
        if isinstance(value, (staticmethod, classmethod)):
            value = value.__func__
        if inspect.isfunction(value):
            yield value
