# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import threading
import time

import pytest

from lintharness.core.runtime import ServiceContainer, ServiceDescription
from lintharness.errors import ContainerFrozenError, ServiceResolutionError


class _Animal:
    pass


class _Dog(_Animal):
    pass


def test_register_and_resolve_singleton() -> None:
    container = ServiceContainer()
    container.register("value", lambda _: object())
    first = container.resolve("value")
    second = container.resolve("value")
    assert first is second


def test_register_non_singleton() -> None:
    container = ServiceContainer()
    container.register("counter", lambda _: object(), singleton=False)
    first = container.resolve("counter")
    second = container.resolve("counter")
    assert first is not second


def test_replace_service() -> None:
    container = ServiceContainer()
    container.register("value", lambda _: "a")
    assert container.resolve("value") == "a"
    container.register("value", lambda _: "b", replace=True)
    assert container.resolve("value") == "b"


def test_duplicate_registration_is_rejected() -> None:
    container = ServiceContainer()
    container.register("value", lambda _: "a")
    with pytest.raises(ValueError, match="already registered"):
        container.register("value", lambda _: "b")


def test_service_missing() -> None:
    container = ServiceContainer()
    with pytest.raises(ServiceResolutionError, match="'missing' is not registered"):
        container.resolve("missing")


def test_missing_service_is_a_key_error() -> None:
    container = ServiceContainer()
    with pytest.raises(KeyError):
        container.resolve("missing")


def test_get_by_type_returns_the_unique_match() -> None:
    container = ServiceContainer()
    dog = _Dog()
    container.register_instance("dog", dog)
    container.register_instance("name", "rex")

    assert container.get_by_type(_Animal) is dog
    assert container.get_by_type(_Dog) is dog
    assert container.get_by_type(str) == "rex"


def test_get_by_type_reports_missing_and_ambiguous_types() -> None:
    container = ServiceContainer()
    container.register_instance("first", _Dog())
    container.register_instance("second", _Dog())

    with pytest.raises(ServiceResolutionError, match="no service of type int"):
        container.get_by_type(int)
    with pytest.raises(ServiceResolutionError, match="first, second"):
        container.get_by_type(_Animal)


def test_services_without_autowiring_are_reachable_by_name_only() -> None:
    container = ServiceContainer()
    hidden = _Dog()
    container.register_instance("hidden", hidden, autowired=False)

    assert container.resolve("hidden") is hidden
    assert container.find_service_names_by_type(_Dog) == []
    with pytest.raises(ServiceResolutionError):
        container.get_by_type(_Dog)


def test_parameters_are_read_only() -> None:
    container = ServiceContainer({"level": 5})

    assert container.get_parameter("level") == 5
    assert container.has_parameter("level")
    assert not container.has_parameter("missing")
    with pytest.raises(ServiceResolutionError, match="parameter 'missing'"):
        container.get_parameter("missing")
    with pytest.raises(TypeError):
        container.parameters["level"] = 6  # type: ignore[index]


def test_frozen_container_rejects_registrations_but_resolves_lazily() -> None:
    built: list[object] = []
    container = ServiceContainer()
    container.register("lazy", lambda _: built.append(object()) or built[-1])
    container.freeze()

    assert container.frozen
    assert built == []
    assert container.resolve("lazy") is built[0]
    with pytest.raises(ContainerFrozenError):
        container.register("late", lambda _: None)


def test_provide_defers_resolution() -> None:
    container = ServiceContainer()
    container.register("value", lambda _: object())
    provider = container.provide("value")

    assert provider() is container.resolve("value")


def test_describe_lists_registrations_in_name_order() -> None:
    container = ServiceContainer()
    container.register("beta", lambda _: "two", singleton=False)
    container.register("alpha", lambda _: "one", provided_type=str, autowired=False)

    assert container.describe() == [
        ServiceDescription(name="alpha", provided_type=str, singleton=True, autowired=False),
        ServiceDescription(name="beta", provided_type=None, singleton=False, autowired=True),
    ]


def test_service_container_dunder_helpers() -> None:
    container = ServiceContainer()
    container.register("alpha", lambda _: "one")
    container.register("beta", lambda _: "two")

    assert len(container) == 2
    assert "alpha" in container
    assert "missing" not in container
    assert repr(container) == "ServiceContainer(keys=[alpha, beta])"


def test_concurrent_resolution_builds_singleton_once() -> None:
    calls: list[object] = []

    def _slow_factory(_: ServiceContainer) -> object:
        time.sleep(0.01)
        calls.append(object())
        return calls[-1]

    container = ServiceContainer()
    container.register("slow", _slow_factory)
    container.register("wrapper", lambda c: [c.resolve("slow")])
    barrier = threading.Barrier(8)
    results: list[object] = []
    lock = threading.Lock()

    def _worker() -> None:
        barrier.wait()
        resolved = container.resolve("slow")
        with lock:
            results.append(resolved)

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert all(result is calls[0] for result in results)
    assert container.resolve("wrapper") == [calls[0]]
