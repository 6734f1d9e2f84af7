# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Scopes tracking variable types while walking analysed files."""

from __future__ import annotations

import ast
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.runtime import ServiceContainer
    from .extensions import (
        DynamicReturnTypeExtensionRegistryProvider,
        OperatorTypeSpecifyingExtensionRegistryProvider,
    )
    from .parser import PrettyPrinter, SourceParser
    from .reflection import ClassReflection, ReflectionProvider
    from .runtime_version import RuntimeVersion

NodeCallback = Callable[[ast.stmt, "MutatingScope"], None]


class TypeSpecifier:
    """Derive narrowed variable types from conditions."""

    def specify_types_in_condition(self, expr: ast.expr) -> dict[str, str]:
        """Return the variable types implied when ``expr`` is truthy.

        Supports ``isinstance(name, T)`` checks and ``and`` chains of them.

        Args:
            expr: Condition expression.

        Returns:
            dict[str, str]: Narrowed type strings keyed by variable name.
        """

        if isinstance(expr, ast.BoolOp) and isinstance(expr.op, ast.And):
            narrowed: dict[str, str] = {}
            for value in expr.values:
                narrowed.update(self.specify_types_in_condition(value))
            return narrowed
        if (
            isinstance(expr, ast.Call)
            and isinstance(expr.func, ast.Name)
            and expr.func.id == "isinstance"
            and len(expr.args) == 2
            and isinstance(expr.args[0], ast.Name)
        ):
            return {expr.args[0].id: ast.unparse(expr.args[1])}
        return {}


class PropertyReflectionFinder:
    """Find attributes declared on reflected classes."""

    def find_property_reflection(self, class_reflection: ClassReflection, name: str) -> bool:
        """Return whether ``class_reflection`` declares an attribute ``name``."""

        return name in class_reflection.attribute_names()


class MutatingScope:
    """Immutable-by-convention mapping of variable names to type strings."""

    def __init__(
        self,
        factory: DirectScopeFactory,
        file: str,
        variable_types: Mapping[str, str] | None = None,
    ) -> None:
        """Initialise the scope.

        Args:
            factory: Factory creating derived scopes.
            file: File the scope belongs to.
            variable_types: Known variable types keyed by name.
        """

        self._factory = factory
        self.file = file
        self._variable_types = dict(variable_types or {})

    def has_variable_type(self, name: str) -> bool:
        """Return whether the type of ``name`` is known."""

        return name in self._variable_types

    def get_variable_type(self, name: str) -> str | None:
        """Return the type string of ``name`` or ``None``."""

        return self._variable_types.get(name)

    def assign_variable(self, name: str, type_string: str) -> MutatingScope:
        """Return a new scope in which ``name`` has ``type_string``."""

        return self._factory.create(self.file, {**self._variable_types, name: type_string})

    def filter_by_truthy_value(self, expr: ast.expr) -> MutatingScope:
        """Return the scope narrowed by ``expr`` being truthy.

        The scope itself is returned when ``expr`` narrows nothing.
        """

        narrowed = self._factory.type_specifier.specify_types_in_condition(expr)
        if not narrowed:
            return self
        return self._factory.create(self.file, {**self._variable_types, **narrowed})

    def print(self, node: ast.AST) -> str:
        """Render ``node`` back to source text."""

        return self._factory.printer.print_expr(node)


class NodeScopeResolver:
    """Walk statements, handing each one to a callback with its scope."""

    def __init__(self, parser: SourceParser, reflection_provider: ReflectionProvider) -> None:
        self._parser = parser
        self._reflection_provider = reflection_provider

    def process_file(self, path: str | Path, scope: MutatingScope, callback: NodeCallback) -> MutatingScope:
        """Parse ``path`` and walk its statements with :meth:`process_nodes`."""

        return self.process_nodes(self._parser.parse_file(path), scope, callback)

    def process_nodes(self, nodes: Sequence[ast.stmt], scope: MutatingScope, callback: NodeCallback) -> MutatingScope:
        """Walk ``nodes`` in order, invoking ``callback`` with the scope before each node.

        Assignments extend the scope. ``if`` bodies see the narrowed scope,
        while their ``else`` branches see the unnarrowed one.

        Args:
            nodes: Statements to walk.
            scope: Scope in effect before the first statement.
            callback: Receiver of each statement and its scope.

        Returns:
            MutatingScope: Scope in effect after the last statement.
        """

        for node in nodes:
            callback(node, scope)
            if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
                scope = scope.assign_variable(node.target.id, ast.unparse(node.annotation))
            elif isinstance(node, ast.Assign) and len(node.targets) == 1 and isinstance(node.targets[0], ast.Name):
                inferred = self._infer(node.value)
                if inferred is not None:
                    scope = scope.assign_variable(node.targets[0].id, inferred)
            elif isinstance(node, ast.If):
                self.process_nodes(node.body, scope.filter_by_truthy_value(node.test), callback)
                self.process_nodes(node.orelse, scope, callback)
        return scope

    def _infer(self, value: ast.expr) -> str | None:
        if isinstance(value, ast.Call) and isinstance(value.func, ast.Name):
            if self._reflection_provider.has_class(value.func.id):
                return value.func.id
        if isinstance(value, ast.Constant) and value.value is not None:
            return type(value.value).__name__
        return None


@dataclass(slots=True)
class DirectScopeFactory:
    """Create scopes wired to the collaborators of one analysis run."""

    scope_class: type[MutatingScope]
    reflection_provider: ReflectionProvider
    dynamic_return_type_extension_registry_provider: DynamicReturnTypeExtensionRegistryProvider
    operator_type_specifying_extension_registry_provider: OperatorTypeSpecifyingExtensionRegistryProvider
    printer: PrettyPrinter
    type_specifier: TypeSpecifier
    property_reflection_finder: PropertyReflectionFinder
    parser: SourceParser
    node_scope_resolver: NodeScopeResolver
    treat_doc_types_as_certain: bool
    container: ServiceContainer
    runtime_version: RuntimeVersion

    def create(self, file: str, variable_types: Mapping[str, str] | None = None) -> MutatingScope:
        """Return a scope for ``file`` holding ``variable_types``."""

        return self.scope_class(self, file, variable_types)


__all__ = [
    "DirectScopeFactory",
    "MutatingScope",
    "NodeScopeResolver",
    "PropertyReflectionFinder",
    "TypeSpecifier",
]
