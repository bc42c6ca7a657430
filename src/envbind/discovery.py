"""
Field discovery.

Enumerates the annotated fields of a class or module, keeps the ones carrying
an ``EnvVar`` declaration and classifies each field's declared shape once, so
conversion can dispatch on a fixed set of kinds.
"""

from __future__ import annotations

import collections.abc
import inspect
import sys
import types
from dataclasses import dataclass
from enum import Enum
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    ForwardRef,
    Mapping,
    Optional,
    Union,
    get_args,
    get_origin,
)

from .declaration import find_declaration
from .errors import EnvBindError
from .logging import get_logger
from .resolver import Target

logger = get_logger(__name__)

if sys.version_info >= (3, 14):
    import annotationlib

_UNRESOLVED = object()

_SEQUENCE_ORIGINS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    tuple: tuple,
}


class FieldKind(Enum):
    BOOLEAN = "boolean"
    ENUMERATION = "enumeration"
    SCALAR = "scalar"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FieldShape:
    """Declared shape of a bound field."""

    kind: FieldKind
    type: Any
    element: Optional[FieldShape] = None
    optional: bool = False


@dataclass(frozen=True)
class BoundField:
    """A field on ``owner`` bound to the environment variable ``name``."""

    name: str
    attribute: str
    shape: FieldShape
    owner: Target

    def get(self, default: Any = None) -> Any:
        return getattr(self.owner, self.attribute, default)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attribute, value)


def discover_bindings(target: Target, localns: Optional[Mapping[str, Any]] = None) -> Dict[str, BoundField]:
    """
    Build the binding map for a class or module.

    Only annotations declared directly on ``target`` are considered, in
    declaration order. When several fields declare the same name the first
    one wins and the rest are ignored.

    String annotations are evaluated one field at a time. A field whose
    annotation cannot be evaluated is skipped unless it mentions ``EnvVar``.

    Args:
        target: Class or module declaring the fields
        localns: Extra names for evaluating string annotations, such as the
            locals of the function that defined ``target``

    Returns:
        Mapping of environment variable name to bound field

    Raises:
        EnvBindError: If the annotation of a bound field cannot be evaluated
    """
    globalns, namespace = _namespaces(target, localns)

    bindings: Dict[str, BoundField] = {}
    for attribute, annotation in _raw_annotations(target).items():
        annotation = _evaluate(attribute, annotation, globalns, namespace)
        if annotation is _UNRESOLVED:
            continue

        hint, metadata = _unwrap(annotation)
        declaration = find_declaration(metadata)
        if declaration is None:
            continue

        if declaration.name in bindings:
            logger.debug(
                f"Ignoring '{attribute}': '{declaration.name}' is already bound to "
                f"'{bindings[declaration.name].attribute}'"
            )
            continue

        bindings[declaration.name] = BoundField(
            name=declaration.name,
            attribute=attribute,
            shape=classify(hint),
            owner=target,
        )

    logger.debug(f"Discovered {len(bindings)} bindings on {getattr(target, '__qualname__', target.__name__)}")
    return bindings


def _raw_annotations(target: Target) -> Dict[str, Any]:
    if sys.version_info >= (3, 14):
        return annotationlib.get_annotations(target, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(target)


def _namespaces(target: Target, localns: Optional[Mapping[str, Any]]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    if isinstance(target, types.ModuleType):
        return vars(target), dict(localns or {})

    module = sys.modules.get(target.__module__)
    globalns = vars(module) if module is not None else {}
    # Class attributes shadow the caller's locals
    return globalns, {**(localns or {}), **vars(target)}


def _evaluate(attribute: str, annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if isinstance(annotation, ForwardRef):
        source = annotation.__forward_arg__
    elif isinstance(annotation, str):
        source = annotation
    else:
        return annotation

    try:
        return eval(source, globalns, localns)
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        if "EnvVar" in source:
            raise EnvBindError(
                f"Cannot evaluate the annotation of bound field '{attribute}' ({source!r}): {exc}"
            ) from exc
        logger.debug(f"Skipping '{attribute}': annotation {source!r} cannot be evaluated ({exc})")
        return _UNRESOLVED


def classify(annotation: Any) -> FieldShape:
    """Classify a type annotation into a ``FieldShape``."""
    hint, _ = _unwrap(annotation)

    inner = _optional_inner(hint)
    if inner is not None:
        shape = classify(inner)
        return FieldShape(shape.kind, shape.type, shape.element, optional=True)

    if hint is bool:
        return FieldShape(FieldKind.BOOLEAN, bool)

    if isinstance(hint, type) and issubclass(hint, Enum):
        return FieldShape(FieldKind.ENUMERATION, hint)

    origin = get_origin(hint)
    if origin in _SEQUENCE_ORIGINS:
        element = _sequence_element(origin, get_args(hint))
        if element is not None:
            return FieldShape(FieldKind.SEQUENCE, _SEQUENCE_ORIGINS[origin], classify(element))

    return FieldShape(FieldKind.SCALAR, hint)


def _unwrap(annotation: Any) -> tuple[Any, list]:
    """Strip ``ClassVar`` and ``Annotated`` layers, collecting metadata."""
    metadata: list = []
    hint = annotation
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            args = get_args(hint)
            metadata.extend(args[1:])
            hint = args[0]
        elif origin is ClassVar and get_args(hint):
            hint = get_args(hint)[0]
        else:
            return hint, metadata


def _optional_inner(hint: Any) -> Optional[Any]:
    if get_origin(hint) not in (Union, types.UnionType):
        return None
    args = [arg for arg in get_args(hint) if arg is not type(None)]
    if len(args) != 1 or len(args) == len(get_args(hint)):
        return None
    return args[0]


def _sequence_element(origin: Any, args: tuple) -> Optional[Any]:
    if origin is tuple:
        # Only homogeneous tuple[T, ...] maps to a sequence of T
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    if len(args) == 1:
        return args[0]
    return None
