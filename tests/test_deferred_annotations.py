from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar

import pytest

from envbind import EnvVar, discover_bindings, populate
from envbind.errors import ConversionError, EnvBindError
from tests.helpers import deferred_module
from tests.helpers.deferred_module import BrokenBinding, CacheConfig


class TestTypeCheckingOnlyNames:
    def test_unrelated_unresolvable_field_is_skipped(self):
        """A field typed with a TYPE_CHECKING-only import does not block population."""
        populate(CacheConfig, environ={"CACHE_PORT": "8080", "CACHE_RETRIES": "3"})
        assert CacheConfig.port == 8080
        assert CacheConfig.retries == 3
        assert CacheConfig.backend is None

    def test_discovery_keeps_resolvable_bindings(self):
        assert list(discover_bindings(CacheConfig)) == ["CACHE_PORT", "CACHE_RETRIES"]

    def test_module_target(self):
        populate(deferred_module, environ={"DEFERRED_REGION": "eu-central-1"})
        assert deferred_module.REGION == "eu-central-1"
        assert deferred_module.BACKEND is None

    def test_unresolvable_bound_field_raises(self):
        """A bound field whose annotation cannot be evaluated raises EnvBindError."""
        with pytest.raises(EnvBindError, match="backend") as exc_info:
            populate(BrokenBinding, environ={"BROKEN_SIZE": "1", "BROKEN_BACKEND": "redis"})
        assert not isinstance(exc_info.value, ConversionError)
        assert isinstance(exc_info.value.__cause__, NameError)
        assert BrokenBinding.size == 0


class TestLocalTypes:
    def test_local_enum_in_local_class(self):
        """A class defined in a function may name a type local to that function."""

        class Tier(Enum):
            FREE = 1
            PAID = 2

        class Account:
            tier: ClassVar[Annotated[Tier, EnvVar("ACCOUNT_TIER")]] = Tier.FREE

        populate(Account, environ={"ACCOUNT_TIER": "paid"})
        assert Account.tier is Tier.PAID

    def test_local_names_passed_to_discovery(self):
        class Tier(Enum):
            FREE = 1

        class Account:
            tier: ClassVar[Annotated[Tier, EnvVar("ACCOUNT_TIER")]] = Tier.FREE

        with pytest.raises(EnvBindError, match="tier"):
            discover_bindings(Account)
        assert discover_bindings(Account, localns={"Tier": Tier})["ACCOUNT_TIER"].shape.type is Tier

    def test_unresolvable_local_field_without_binding_is_skipped(self):
        class Account:
            name: ClassVar[Annotated[str, EnvVar("ACCOUNT_NAME")]] = ""
            owner: ClassVar[MissingOwnerType] = None  # noqa: F821

        populate(Account, environ={"ACCOUNT_NAME": "acme"})
        assert Account.name == "acme"
