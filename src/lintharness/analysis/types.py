# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of annotation expressions and type aliases."""

from __future__ import annotations

import ast
from collections.abc import Mapping
from dataclasses import dataclass

from .reflection import ReflectionProvider


@dataclass(frozen=True, slots=True)
class ResolvedType:
    """Structured form of an annotation such as ``dict[str, int]``."""

    name: str
    arguments: tuple[ResolvedType, ...] = ()

    def describe(self) -> str:
        if not self.arguments:
            return self.name
        if self.name == "Union":
            return " | ".join(argument.describe() for argument in self.arguments)
        inner = ", ".join(argument.describe() for argument in self.arguments)
        return f"{self.name}[{inner}]"


class TypeNodeResolver:
    """Turn annotation AST nodes into :class:`ResolvedType` values."""

    def resolve(self, node: ast.expr) -> ResolvedType:
        """Return the type described by ``node``.

        Raises:
            ValueError: If ``node`` is not a supported annotation form.
        """

        if isinstance(node, ast.Name):
            return ResolvedType(node.id)
        if isinstance(node, ast.Attribute):
            return ResolvedType(ast.unparse(node))
        if isinstance(node, ast.Constant):
            if node.value is None:
                return ResolvedType("None")
            if isinstance(node.value, str):
                return self.resolve(_parse_expression(node.value))
        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
            members = (*self._union_members(self.resolve(node.left)), *self._union_members(self.resolve(node.right)))
            return ResolvedType("Union", members)
        if isinstance(node, ast.Subscript):
            base = self.resolve(node.value)
            elements = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
            return ResolvedType(base.name, tuple(self.resolve(element) for element in elements))
        raise ValueError(f"unsupported type expression '{ast.unparse(node)}'")

    @staticmethod
    def _union_members(resolved: ResolvedType) -> tuple[ResolvedType, ...]:
        return resolved.arguments if resolved.name == "Union" else (resolved,)


class TypeStringResolver:
    """Resolve annotation strings."""

    def __init__(self, type_node_resolver: TypeNodeResolver) -> None:
        self._type_node_resolver = type_node_resolver

    def resolve(self, type_string: str) -> ResolvedType:
        return self._type_node_resolver.resolve(_parse_expression(type_string))


class TypeAliasResolver:
    """Expand project-wide type aliases.

    Names that resolve to an existing class are never treated as aliases.
    """

    def __init__(
        self,
        global_type_aliases: Mapping[str, str],
        type_string_resolver: TypeStringResolver,
        type_node_resolver: TypeNodeResolver,
        reflection_provider: ReflectionProvider,
    ) -> None:
        self._aliases = dict(global_type_aliases)
        self._type_string_resolver = type_string_resolver
        self._type_node_resolver = type_node_resolver
        self._reflection_provider = reflection_provider
        self._resolved: dict[str, ResolvedType] = {}
        self._in_progress: list[str] = []

    def has_type_alias(self, name: str) -> bool:
        return name in self._aliases and not self._reflection_provider.has_class(name)

    def resolve_type_alias(self, name: str) -> ResolvedType | None:
        """Return the expansion of ``name`` or ``None`` when it is not an alias.

        Raises:
            ValueError: If aliases refer to each other in a cycle.
        """

        if not self.has_type_alias(name):
            return None
        if name in self._resolved:
            return self._resolved[name]
        if name in self._in_progress:
            chain = " -> ".join((*self._in_progress, name))
            raise ValueError(f"circular type alias: {chain}")
        self._in_progress.append(name)
        try:
            resolved = self._expand(self._type_string_resolver.resolve(self._aliases[name]))
        finally:
            self._in_progress.pop()
        self._resolved[name] = resolved
        return resolved

    def resolve_node(self, node: ast.expr) -> ResolvedType:
        """Resolve an annotation node, expanding aliases it mentions."""

        return self._expand(self._type_node_resolver.resolve(node))

    def _expand(self, resolved: ResolvedType) -> ResolvedType:
        if not resolved.arguments:
            return self.resolve_type_alias(resolved.name) or resolved
        return ResolvedType(resolved.name, tuple(self._expand(argument) for argument in resolved.arguments))


def _parse_expression(source: str) -> ast.expr:
    try:
        return ast.parse(source.strip(), mode="eval").body
    except SyntaxError as exc:
        raise ValueError(f"invalid type string '{source}'") from exc


__all__ = ["ResolvedType", "TypeAliasResolver", "TypeNodeResolver", "TypeStringResolver"]
