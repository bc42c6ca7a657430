"""
Caller resolution.

Finds the class or module that declares a function currently on the call
stack, so ``populate()`` can be called without naming its own target.
"""

from __future__ import annotations

import sys
from types import FrameType, ModuleType
from typing import Optional, Union

from .errors import ResolutionError
from .logging import get_logger

logger = get_logger(__name__)

Target = Union[type, ModuleType]


def resolve_caller(caller: str, frame: Optional[FrameType] = None) -> Target:
    """
    Walk the call stack and return the owner of the first frame named ``caller``.

    Args:
        caller: Function name to look for (``co_name`` of the frame)
        frame: Frame to start from; defaults to the frame that called this function

    Returns:
        The class declaring the matching function, or its module for
        module-level functions and module-level code

    Raises:
        ResolutionError: If no frame matches, or the matching frame's owner
            cannot be determined
    """
    if frame is None:
        frame = sys._getframe(1)

    while frame is not None:
        if frame.f_code.co_name == caller:
            owner = _declaring_owner(frame)
            if owner is None:
                raise ResolutionError(
                    caller, f"'{frame.f_code.co_qualname}' is not declared on a class or module"
                )
            logger.debug(f"Resolved caller '{caller}' to {_describe(owner)}")
            return owner
        frame = frame.f_back

    raise ResolutionError(caller, "no matching frame on the call stack")


def _declaring_owner(frame: FrameType) -> Optional[Target]:
    code = frame.f_code
    module = sys.modules.get(frame.f_globals.get("__name__", ""))
    qualname = code.co_qualname

    if qualname == "<module>" or "." not in qualname:
        return module

    owner_qualname = qualname.rsplit(".", 1)[0]
    if owner_qualname.endswith("<locals>"):
        return None

    owner = _owner_from_first_argument(frame, owner_qualname)
    if owner is not None:
        return owner

    if module is None or "<locals>" in owner_qualname:
        return None
    return _owner_from_module(module, owner_qualname)


def _owner_from_first_argument(frame: FrameType, owner_qualname: str) -> Optional[type]:
    """Find the declaring class through ``self``/``cls`` of a method frame."""
    code = frame.f_code
    if code.co_argcount == 0:
        return None

    first = frame.f_locals.get(code.co_varnames[0])
    if first is None:
        return None

    cls = first if isinstance(first, type) else type(first)
    module_name = frame.f_globals.get("__name__")
    for candidate in cls.__mro__:
        if candidate.__qualname__ == owner_qualname and candidate.__module__ == module_name:
            return candidate
    return None


def _owner_from_module(module: ModuleType, owner_qualname: str) -> Optional[type]:
    owner: object = module
    for part in owner_qualname.split("."):
        owner = getattr(owner, part, None)
        if owner is None:
            return None
    return owner if isinstance(owner, type) else None


def _describe(owner: Target) -> str:
    if isinstance(owner, ModuleType):
        return f"module {owner.__name__}"
    return f"class {owner.__module__}.{owner.__qualname__}"
