"""Bindings declared under postponed annotation evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, ClassVar, Optional

from envbind import EnvVar

if TYPE_CHECKING:
    from tests.helpers.typing_only import CacheBackend

REGION: Annotated[str, EnvVar("DEFERRED_REGION")] = "unset"
BACKEND: Optional[CacheBackend] = None


class CacheConfig:
    port: ClassVar[Annotated[int, EnvVar("CACHE_PORT")]] = 0
    backend: ClassVar[Optional[CacheBackend]] = None
    retries: ClassVar[Annotated[int, EnvVar("CACHE_RETRIES")]] = 0


class BrokenBinding:
    size: ClassVar[Annotated[int, EnvVar("BROKEN_SIZE")]] = 0
    backend: ClassVar[Annotated[CacheBackend, EnvVar("BROKEN_BACKEND")]] = None
