from typing import Optional

import pytest

from wirebox.descriptors import BeanEntry, ParameterSpec
from wirebox.reflection import DefaultReflection
from wirebox.registry import SingletonRegistry
from wirebox.resolver import BindingResolver
from wirebox.exceptions import ContainerStateError


class Storage: ...
class LocalStorage(Storage): ...
class S3Storage(Storage): ...
class Cache: ...


@pytest.fixture
def registry():
    return SingletonRegistry()


@pytest.fixture
def resolver(registry):
    return BindingResolver(registry, DefaultReflection())


def _add(registry, name, instance, declared=None):
    registry.add(BeanEntry(name=name, instance=instance, declared_type=declared or type(instance)))


def test_resolve_returns_none_when_nothing_matches(resolver, registry):
    _add(registry, "cache", Cache())
    assert resolver.resolve(Storage) is None
    assert resolver.resolve(None) is None


def test_resolve_first_match_in_insertion_order(resolver, registry):
    s3 = S3Storage()
    local = LocalStorage()
    _add(registry, "s3Storage", s3)
    _add(registry, "localStorage", local)

    assert resolver.resolve(Storage).instance is s3
    assert resolver.resolve(LocalStorage).instance is local
    assert [e.name for e in resolver.resolve_all(Storage)] == ["s3Storage", "localStorage"]


def test_resolve_uses_runtime_type_when_declared_type_is_wider(resolver, registry):
    _add(registry, "storage", LocalStorage(), declared=Storage)
    assert resolver.resolve(LocalStorage).name == "storage"


def test_bind_collects_kwargs_and_dependency_names(resolver, registry):
    cache = Cache()
    _add(registry, "cache", cache)
    _add(registry, "localStorage", LocalStorage())

    binding = resolver.bind([ParameterSpec("c", Cache), ParameterSpec("s", Storage)])

    assert binding.kwargs["c"] is cache
    assert isinstance(binding.kwargs["s"], LocalStorage)
    assert binding.dependencies == ("cache", "localStorage")


def test_bind_fails_on_missing_required(resolver):
    assert resolver.bind([ParameterSpec("s", Storage)]) is None
    assert resolver.bind([ParameterSpec("x", None)]) is None


def test_bind_defaults_and_optionals(resolver):
    binding = resolver.bind([
        ParameterSpec("s", Storage, has_default=True),
        ParameterSpec("c", Cache, is_optional=True),
    ])

    assert binding.kwargs == {"c": None}
    assert binding.dependencies == ()


def test_unresolved_lists_only_required_failures(resolver, registry):
    _add(registry, "cache", Cache())
    params = [ParameterSpec("c", Cache), ParameterSpec("s", Storage), ParameterSpec("o", Storage, is_optional=True)]

    assert [p.parameter_name for p in resolver.unresolved(params)] == ["s"]


def test_registry_keeps_first_entry_and_freezes(registry):
    first = Cache()
    assert registry.add(BeanEntry("cache", first, Cache)) is True
    assert registry.add(BeanEntry("cache", Cache(), Cache)) is False
    assert registry.get("cache").instance is first

    registry.freeze()
    with pytest.raises(ContainerStateError):
        registry.add(BeanEntry("other", Cache(), Cache))
    with pytest.raises(TypeError):
        registry.view()["x"] = None


def test_strict_bind_waits_for_typed_optionals(resolver):
    params = [ParameterSpec("s", Storage, has_default=True), ParameterSpec("c", Cache, is_optional=True)]

    assert resolver.bind(params, strict=True) is None
    assert resolver.bind([ParameterSpec("x", None, has_default=True)], strict=True).kwargs == {}
