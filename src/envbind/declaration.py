"""
Binding declarations.

An ``EnvVar`` marker goes inside ``typing.Annotated`` on a class attribute or
module global and names the environment variable the field is populated from::

    class Settings:
        port: ClassVar[Annotated[int, EnvVar("APP_PORT")]] = 8000
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class EnvVar:
    """Name of the environment variable a field binds to."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"EnvVar name must be a non-empty string, got {self.name!r}")


def find_declaration(metadata: Iterable[object]) -> Optional[EnvVar]:
    """Return the first ``EnvVar`` among ``Annotated`` metadata, if any."""
    for item in metadata:
        if isinstance(item, EnvVar):
            return item
    return None
