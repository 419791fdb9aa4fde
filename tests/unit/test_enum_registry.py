"""Tests for enumkit.core.registry: caching, isolation and concurrent first access."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

import enumkit.core.registry as registry_module
from enumkit import Enum, EnumRegistry, UnknownConstantError, get_default_registry


class TestRegistryBinding:
    """Classes use the default registry unless bound to another one."""

    def test_default_registry_is_shared(self) -> None:
        assert get_default_registry() is get_default_registry()

    def test_class_bound_to_registry(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        assert not registry.is_cached(local_enum)
        assert local_enum.A.value == 1
        assert registry.is_cached(local_enum)
        assert not get_default_registry().is_cached(local_enum)

    def test_subclass_inherits_registry(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        class Child(local_enum):  # type: ignore[valid-type,misc]
            C = (3, "c")

        assert Child.C.label == "c"
        assert registry.is_cached(Child)
        assert not get_default_registry().is_cached(Child)


class TestInstanceCache:
    """Named access caches; searches mint fresh instances."""

    def test_instance_of_is_cached(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        first = registry.instance_of(local_enum, "A")
        assert registry.instance_of(local_enum, "A") is first
        assert local_enum.A is first

    def test_instance_of_unknown(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        with pytest.raises(UnknownConstantError) as exc_info:
            registry.instance_of(local_enum, "Z")
        assert exc_info.value.key == "Z"

    def test_instance_of_key_is_fresh(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        fresh = registry.instance_of_key(local_enum, "B")
        assert fresh == local_enum.B
        assert fresh is not local_enum.B
        assert registry.instance_of_key(local_enum, "Z") is None
        assert registry.instance_of_key(local_enum, 2) is None

    def test_instance_of_value_is_fresh(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        fresh = registry.instance_of_value(local_enum, 2)
        assert fresh == local_enum.B
        assert fresh is not local_enum.B
        assert registry.instance_of_value(local_enum, 99) is None
        assert registry.instance_of_value(local_enum, {"unhashable": True}) is None

    def test_clear_one_class(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        before = local_enum.A
        registry.clear(local_enum)
        assert not registry.is_cached(local_enum)
        after = local_enum.A
        assert after is not before
        assert after == before

    def test_clear_all(self, registry: EnumRegistry, local_enum: type[Enum]) -> None:
        local_enum.all_keys()
        registry.clear()
        assert not registry.is_cached(local_enum)


class TestConcurrentFirstAccess:
    """Racing threads build the table and each named instance once."""

    def test_metadata_built_once(
        self, monkeypatch: pytest.MonkeyPatch, registry: EnumRegistry, local_enum: type[Enum]
    ) -> None:
        calls: list[str] = []
        real_build = registry_module.build_metadata

        def counting_build(*args, **kwargs):
            calls.append(args[0])
            return real_build(*args, **kwargs)

        monkeypatch.setattr(registry_module, "build_metadata", counting_build)

        workers = 16
        barrier = threading.Barrier(workers)

        def access(_: int) -> Enum:
            barrier.wait()
            return local_enum.of("A")

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(access, range(workers)))

        assert len(calls) == 1
        assert all(member is results[0] for member in results)
