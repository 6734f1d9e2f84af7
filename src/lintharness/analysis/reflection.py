# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Runtime and static reflection over analysed code."""

from __future__ import annotations

import ast
import builtins
import importlib
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .file_helper import FileHelper
from .parser import SourceParser


class ClassNotFoundError(LookupError):
    """Raised when a class cannot be reflected."""


class RuntimeStubRegistry:
    """Objects registered by runtime stub bootstrap files."""

    def __init__(self) -> None:
        """Initialise an empty registry."""

        self._stubs: dict[str, object] = {}

    def register(self, name: str, value: object) -> None:
        """Expose ``value`` to reflection under ``name``.

        Args:
            name: Unqualified name analysed code refers to.
            value: Runtime object, usually a class, backing the name.
        """

        self._stubs[name] = value

    def get(self, name: str) -> object | None:
        """Return the object registered as ``name`` or ``None``."""

        return self._stubs.get(name)

    def names(self) -> list[str]:
        """Return every registered name in sorted order."""

        return sorted(self._stubs)

    def __contains__(self, name: str) -> bool:
        """Return whether ``name`` has been registered."""

        return name in self._stubs


@dataclass(frozen=True, slots=True)
class ClassReflection:
    """Describe a class found either at runtime or in source."""

    name: str
    native: type | None = None
    node: ast.ClassDef | None = None
    file: str | None = None

    @property
    def is_builtin(self) -> bool:
        """Return whether the reflected class lives in :mod:`builtins`."""

        return self.native is not None and self.native.__module__ == "builtins"

    def attribute_names(self) -> frozenset[str]:
        """Return attribute names declared on the class.

        Runtime classes report everything :func:`dir` sees. Source classes
        report methods, nested classes and simple assignments of the body.

        Returns:
            frozenset[str]: Declared attribute names.
        """

        if self.native is not None:
            return frozenset(dir(self.native))
        if self.node is None:
            return frozenset()
        names: set[str] = set()
        for stmt in self.node.body:
            if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
                names.add(stmt.name)
            elif isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
                names.add(stmt.target.id)
            elif isinstance(stmt, ast.Assign):
                names.update(target.id for target in stmt.targets if isinstance(target, ast.Name))
        return frozenset(names)


@dataclass(frozen=True, slots=True)
class FunctionReflection:
    """Top-level function declared in a scanned file."""

    name: str
    node: ast.FunctionDef | ast.AsyncFunctionDef
    file: str


@dataclass(frozen=True, slots=True)
class ConstantReflection:
    """Upper-case module constant together with the source of its value."""

    name: str
    value_source: str
    file: str


class SourceIndex:
    """Index top-level declarations of the configured scan paths.

    The index is built on first access and kept for the lifetime of the
    instance. When a name is declared more than once the first file in scan
    order wins.
    """

    def __init__(
        self,
        parser: SourceParser,
        file_helper: FileHelper,
        scan_files: Sequence[str] = (),
        scan_directories: Sequence[str] = (),
    ) -> None:
        """Initialise the index.

        Args:
            parser: Parser used to read each scanned file.
            file_helper: Helper anchoring relative scan paths.
            scan_files: Individual files to index.
            scan_directories: Directories searched recursively for ``*.py`` files.
        """

        self._parser = parser
        self._file_helper = file_helper
        self._scan_files = tuple(scan_files)
        self._scan_directories = tuple(scan_directories)
        self._classes: dict[str, ClassReflection] | None = None
        self._functions: dict[str, FunctionReflection] = {}
        self._constants: dict[str, ConstantReflection] = {}

    def files(self) -> list[Path]:
        """Return every Python file covered by the index, in scan order."""

        found = [Path(self._file_helper.absolutize_path(path)) for path in self._scan_files]
        for directory in self._scan_directories:
            found.extend(sorted(Path(self._file_helper.absolutize_path(directory)).rglob("*.py")))
        return found

    def classes(self) -> dict[str, ClassReflection]:
        """Return indexed classes keyed by name."""

        self._build()
        return self._classes or {}

    def functions(self) -> dict[str, FunctionReflection]:
        """Return indexed functions keyed by name."""

        self._build()
        return self._functions

    def constants(self) -> dict[str, ConstantReflection]:
        """Return indexed constants keyed by name."""

        self._build()
        return self._constants

    def _build(self) -> None:
        if self._classes is not None:
            return
        classes: dict[str, ClassReflection] = {}
        for path in self.files():
            file = str(path)
            for stmt in self._parser.parse_file(path):
                if isinstance(stmt, ast.ClassDef):
                    classes.setdefault(stmt.name, ClassReflection(stmt.name, node=stmt, file=file))
                elif isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
                    self._functions.setdefault(stmt.name, FunctionReflection(stmt.name, stmt, file))
                elif isinstance(stmt, ast.Assign):
                    for target in stmt.targets:
                        if isinstance(target, ast.Name) and target.id.isupper():
                            self._constants.setdefault(
                                target.id, ConstantReflection(target.id, ast.unparse(stmt.value), file)
                            )
        self._classes = classes


class ClassReflector:
    """Look up classes in a :class:`SourceIndex`."""

    def __init__(self, index: SourceIndex) -> None:
        self._index = index

    def reflect(self, name: str) -> ClassReflection | None:
        """Return the class declared as ``name`` or ``None``."""

        return self._index.classes().get(name)


class FunctionReflector:
    """Look up functions in a :class:`SourceIndex`."""

    def __init__(self, index: SourceIndex) -> None:
        self._index = index

    def reflect(self, name: str) -> FunctionReflection | None:
        """Return the function declared as ``name`` or ``None``."""

        return self._index.functions().get(name)


class ConstantReflector:
    """Look up constants in a :class:`SourceIndex`."""

    def __init__(self, index: SourceIndex) -> None:
        self._index = index

    def reflect(self, name: str) -> ConstantReflection | None:
        """Return the constant declared as ``name`` or ``None``."""

        return self._index.constants().get(name)


class Reflector:
    """Single entry point combining the class, function and constant reflectors."""

    def __init__(
        self,
        class_reflector: ClassReflector,
        function_reflector: FunctionReflector,
        constant_reflector: ConstantReflector,
    ) -> None:
        """Combine the three reflectors.

        Args:
            class_reflector: Reflector answering class lookups.
            function_reflector: Reflector answering function lookups.
            constant_reflector: Reflector answering constant lookups.
        """

        self.class_reflector = class_reflector
        self.function_reflector = function_reflector
        self.constant_reflector = constant_reflector

    def reflect_class(self, name: str) -> ClassReflection | None:
        """Return the class declared as ``name`` or ``None``."""

        return self.class_reflector.reflect(name)

    def reflect_function(self, name: str) -> FunctionReflection | None:
        """Return the function declared as ``name`` or ``None``."""

        return self.function_reflector.reflect(name)

    def reflect_constant(self, name: str) -> ConstantReflection | None:
        """Return the constant declared as ``name`` or ``None``."""

        return self.constant_reflector.reflect(name)


class ReflectionProvider(ABC):
    """Answer questions about classes and functions visible to the analysis.

    Objects registered in the runtime stub registry take precedence over
    whatever the concrete provider finds.
    """

    def __init__(self, stubs: RuntimeStubRegistry) -> None:
        """Initialise the provider.

        Args:
            stubs: Registry filled by runtime stub bootstrap files.
        """

        self._stubs = stubs

    @abstractmethod
    def _find_class(self, name: str) -> ClassReflection | None:
        raise NotImplementedError

    @abstractmethod
    def has_function(self, name: str) -> bool:
        """Return whether a function called ``name`` is visible.

        Args:
            name: Function name, dotted for runtime lookups.

        Returns:
            bool: ``True`` when the function exists.
        """

        raise NotImplementedError

    def has_class(self, name: str) -> bool:
        """Return whether a class called ``name`` is visible."""

        return self._lookup_class(name) is not None

    def get_class(self, name: str) -> ClassReflection:
        """Return the reflection of ``name``.

        Args:
            name: Class name, dotted for runtime lookups.

        Returns:
            ClassReflection: Reflection of the class.

        Raises:
            ClassNotFoundError: If the class is unknown.
        """

        reflection = self._lookup_class(name)
        if reflection is None:
            raise ClassNotFoundError(name)
        return reflection

    def _lookup_class(self, name: str) -> ClassReflection | None:
        stub = self._stubs.get(name)
        if isinstance(stub, type):
            return ClassReflection(name, native=stub)
        return self._find_class(name)


class RuntimeReflectionProvider(ReflectionProvider):
    """Reflect classes and functions by importing them.

    Undotted names are looked up in :mod:`builtins`; dotted names import the
    module part and read the final attribute.
    """

    def _find_class(self, name: str) -> ClassReflection | None:
        value = _import_runtime(name)
        return ClassReflection(name, native=value) if isinstance(value, type) else None

    def has_function(self, name: str) -> bool:
        """Return whether ``name`` imports to a callable that is not a class."""

        value = _import_runtime(name)
        return callable(value) and not isinstance(value, type)


class StaticReflectionProvider(ReflectionProvider):
    """Reflect classes from source without importing analysed code.

    Names missing from the source index fall back to :mod:`builtins`.
    """

    def __init__(self, reflector: Reflector, stubs: RuntimeStubRegistry) -> None:
        """Initialise the provider.

        Args:
            reflector: Reflector over the scanned sources.
            stubs: Registry filled by runtime stub bootstrap files.
        """

        super().__init__(stubs)
        self._reflector = reflector

    def _find_class(self, name: str) -> ClassReflection | None:
        reflection = self._reflector.reflect_class(name)
        if reflection is not None:
            return reflection
        value = getattr(builtins, name, None)
        return ClassReflection(name, native=value) if isinstance(value, type) else None

    def has_function(self, name: str) -> bool:
        """Return whether the scanned sources declare a function ``name``."""

        return self._reflector.reflect_function(name) is not None


class Broker:
    """Legacy facade over a :class:`ReflectionProvider`.

    Scheduled for removal; use the reflection provider directly.
    """

    def __init__(self, reflection_provider: ReflectionProvider) -> None:
        self._reflection_provider = reflection_provider

    def has_class(self, name: str) -> bool:
        """Delegate to :meth:`ReflectionProvider.has_class`."""

        return self._reflection_provider.has_class(name)

    def get_class(self, name: str) -> ClassReflection:
        """Delegate to :meth:`ReflectionProvider.get_class`."""

        return self._reflection_provider.get_class(name)


def _import_runtime(name: str) -> object | None:
    module_name, _, attribute = name.rpartition(".")
    if not module_name:
        return getattr(builtins, attribute, None)
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    return getattr(module, attribute, None)


__all__ = [
    "Broker",
    "ClassNotFoundError",
    "ClassReflection",
    "ClassReflector",
    "ConstantReflection",
    "ConstantReflector",
    "FunctionReflection",
    "FunctionReflector",
    "ReflectionProvider",
    "Reflector",
    "RuntimeReflectionProvider",
    "RuntimeStubRegistry",
    "SourceIndex",
    "StaticReflectionProvider",
]
