"""
Population of bound fields from the environment.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional

from .config import Settings
from .conversion import convert_value
from .discovery import discover_bindings
from .logging import get_logger
from .resolver import Target, resolve_caller

logger = get_logger(__name__)


def populate(
    target: Optional[Target] = None,
    *,
    caller: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Populate every ``EnvVar``-annotated field of a class or module.

    When ``target`` is omitted it is inferred from the call stack: the class
    (or module) declaring the function named ``caller`` is used, and
    ``caller`` itself defaults to the function calling ``populate``.

    Fields are assigned one by one in declaration order. A conversion failure
    stops the pass; fields assigned before it keep their new values.

    String annotations are evaluated with the calling function's locals
    available, so a class defined inside a function may use local types.

    Args:
        target: Class or module whose fields are populated
        caller: Name of the function whose owner should be populated
        environ: Mapping to read values from; defaults to ``os.environ``
        settings: Conversion literals; defaults to ``Settings()``

    Raises:
        ResolutionError: If ``target`` is omitted and cannot be inferred
        EnvBindError: If the annotation of a bound field cannot be evaluated
        ConversionError: If a value cannot be converted to its field's type
    """
    frame = sys._getframe(1)
    if target is None:
        target = resolve_caller(caller or frame.f_code.co_name, frame)

    if environ is None:
        environ = os.environ
    settings = settings or Settings()

    bindings = discover_bindings(target, localns=dict(frame.f_locals))
    del frame

    for name, field in bindings.items():
        field.set(convert_value(environ.get(name), field, settings))
        logger.debug(f"Populated {field.attribute} from {name}")
