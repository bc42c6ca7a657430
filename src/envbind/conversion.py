"""
Conversion of raw environment strings into typed field values.

Parsing never depends on the host locale: numbers always use ``.`` as the
decimal point and temporal values are read as ISO 8601.
"""

from __future__ import annotations

import collections.abc
from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from .config import Settings
from .discovery import BoundField, FieldKind, FieldShape
from .errors import ConversionError


def _invariant_number(parser: Callable[[str], Any]) -> Callable[[str], Any]:
    """Restrict a numeric constructor to plain ASCII digits without ``_`` separators."""

    def parse(raw: str) -> Any:
        if not raw.isascii() or "_" in raw:
            raise ValueError(f"not an invariant number: {raw!r}")
        return parser(raw)

    return parse


# Scalar types with a known locale-independent parser; other classes are called with the raw string
SCALAR_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    int: _invariant_number(int),
    float: _invariant_number(float),
    Decimal: _invariant_number(Decimal),
    Fraction: _invariant_number(Fraction),
    datetime: datetime.fromisoformat,
    date: date.fromisoformat,
    time: time.fromisoformat,
    UUID: UUID,
    Path: Path,
}

_CONVERSION_FAILURES = (ValueError, TypeError, ArithmeticError)


def convert_value(raw: Optional[str], field: BoundField, settings: Optional[Settings] = None) -> Any:
    """
    Convert a raw environment value into the declared shape of ``field``.

    Args:
        raw: String read from the environment, or None when the variable is unset
        field: Bound field describing the target shape
        settings: Conversion literals; defaults to ``Settings()``

    Returns:
        Value matching the field's declared shape

    Raises:
        ConversionError: If the value cannot be converted
    """
    settings = settings or Settings()
    shape = field.shape

    if shape.kind is FieldKind.BOOLEAN:
        return _convert_bool(raw, settings)

    if raw is None:
        if shape.optional:
            return None
        raise ConversionError(field.name, raw, shape.type, "variable is not set")

    if shape.kind is FieldKind.SEQUENCE:
        return _convert_sequence(raw, field.name, shape, settings)
    return _convert_single(raw, field.name, shape, settings)


def _convert_bool(raw: Optional[str], settings: Settings) -> bool:
    if raw is None:
        return False
    return raw.casefold() == settings.true_literal.casefold()


def _convert_sequence(raw: str, name: str, shape: FieldShape, settings: Settings) -> Any:
    element = shape.element
    if element.kind is FieldKind.SEQUENCE:
        raise ConversionError(name, raw, shape.type, "nested sequences are not supported")

    values = [
        _convert_single(segment.strip(), name, element, settings)
        for segment in raw.split(settings.separator)
    ]
    return shape.type(values)


def _convert_single(raw: str, name: str, shape: FieldShape, settings: Settings) -> Any:
    if shape.kind is FieldKind.BOOLEAN:
        return _convert_bool(raw, settings)
    if shape.kind is FieldKind.ENUMERATION:
        return _convert_enum(raw, name, shape.type)

    parser = _scalar_parser(shape.type)
    if parser is None:
        raise ConversionError(name, raw, shape.type, "unsupported field type")

    try:
        return parser(raw)
    except _CONVERSION_FAILURES as exc:
        raise ConversionError(name, raw, shape.type) from exc


def _convert_enum(raw: str, name: str, enum_type: Any) -> Any:
    wanted = raw.strip().casefold()
    for member_name, member in enum_type.__members__.items():
        if member_name.casefold() == wanted:
            return member
    raise ConversionError(name, raw, enum_type, f"expected one of {', '.join(enum_type.__members__)}")


def _scalar_parser(target_type: Any) -> Optional[Callable[[str], Any]]:
    if not isinstance(target_type, type) or target_type is Any:
        return None
    parser = SCALAR_PARSERS.get(target_type)
    if parser is not None:
        return parser
    if issubclass(target_type, collections.abc.Collection) and not issubclass(target_type, str):
        return None
    return target_type
