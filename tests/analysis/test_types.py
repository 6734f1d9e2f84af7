# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import ast

import pytest

from lintharness.analysis.reflection import RuntimeReflectionProvider, RuntimeStubRegistry
from lintharness.analysis.types import ResolvedType, TypeAliasResolver, TypeNodeResolver, TypeStringResolver


@pytest.fixture
def string_resolver() -> TypeStringResolver:
    return TypeStringResolver(TypeNodeResolver())


def _alias_resolver(aliases: dict[str, str], string_resolver: TypeStringResolver) -> TypeAliasResolver:
    return TypeAliasResolver(
        aliases,
        string_resolver,
        TypeNodeResolver(),
        RuntimeReflectionProvider(RuntimeStubRegistry()),
    )


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        ("int", "int"),
        ("dict[str, list[int]]", "dict[str, list[int]]"),
        ("int | None", "int | None"),
        ("str | int | bytes", "str | int | bytes"),
        ("'os.PathLike'", "os.PathLike"),
    ],
)
def test_type_string_resolver_describes_annotations(
    string_resolver: TypeStringResolver, annotation: str, expected: str
) -> None:
    assert string_resolver.resolve(annotation).describe() == expected


def test_type_string_resolver_rejects_unsupported_expressions(string_resolver: TypeStringResolver) -> None:
    with pytest.raises(ValueError, match="unsupported type expression"):
        string_resolver.resolve("1 + 2")
    with pytest.raises(ValueError, match="invalid type string"):
        string_resolver.resolve("dict[")


def test_alias_resolver_expands_nested_aliases(string_resolver: TypeStringResolver) -> None:
    resolver = _alias_resolver({"UserId": "int", "Users": "dict[UserId, str]"}, string_resolver)

    assert resolver.has_type_alias("Users")
    assert resolver.resolve_type_alias("Users") == ResolvedType(
        "dict", (ResolvedType("int"), ResolvedType("str"))
    )
    assert resolver.resolve_node(ast.parse("list[Users]", mode="eval").body).describe() == "list[dict[int, str]]"


def test_alias_resolver_ignores_names_of_existing_classes(string_resolver: TypeStringResolver) -> None:
    resolver = _alias_resolver({"int": "str"}, string_resolver)

    assert not resolver.has_type_alias("int")
    assert resolver.resolve_type_alias("int") is None
    assert resolver.resolve_type_alias("Missing") is None


def test_alias_resolver_detects_cycles(string_resolver: TypeStringResolver) -> None:
    resolver = _alias_resolver({"A": "list[B]", "B": "A | None"}, string_resolver)

    with pytest.raises(ValueError, match="circular type alias: A -> B -> A"):
        resolver.resolve_type_alias("A")
