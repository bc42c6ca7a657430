"""
envbind

Binds environment variables to annotated class attributes and module globals:

    class Settings:
        debug: ClassVar[Annotated[bool, EnvVar("APP_DEBUG")]] = False
        hosts: ClassVar[Annotated[list[str], EnvVar("APP_HOSTS")]] = []

        @classmethod
        def load(cls):
            populate()
"""

from .config import Settings
from .conversion import convert_value
from .declaration import EnvVar
from .discovery import BoundField, FieldKind, FieldShape, classify, discover_bindings
from .errors import ConversionError, EnvBindError, ResolutionError
from .population import populate
from .resolver import resolve_caller

__version__ = "0.1.0"

__all__ = [
    "populate",
    "EnvVar",
    "discover_bindings",
    "classify",
    "resolve_caller",
    "convert_value",
    "BoundField",
    "FieldKind",
    "FieldShape",
    "Settings",
    "EnvBindError",
    "ResolutionError",
    "ConversionError",
]
