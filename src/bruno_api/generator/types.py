"""Structural type nodes and named declarations produced by inference.

A TypeNode is one of:
    Primitive   -- string / number / boolean / null, or `any` (unknown element)
    ArrayOf     -- array of another TypeNode
    Reference   -- name of a TypeDeclaration in the same forest
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Primitive:
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayOf:
    items: TypeNode

    def render(self) -> str:
        return f"{self.items.render()}[]"


@dataclass(frozen=True)
class Reference:
    name: str

    def render(self) -> str:
        return self.name


TypeNode = Union[Primitive, ArrayOf, Reference]

STRING = Primitive("string")
NUMBER = Primitive("number")
BOOLEAN = Primitive("boolean")
NULL = Primitive("null")
ANY = Primitive("any")
ANY_ARRAY = ArrayOf(ANY)


@dataclass(frozen=True)
class TypeDeclaration:
    """A named object type, or a type alias when `alias` is set."""

    name: str
    fields: tuple[tuple[str, TypeNode], ...] = ()
    alias: TypeNode | None = None

    @property
    def field_types(self) -> dict[str, str]:
        return {key: node.render() for key, node in self.fields}

    def references(self) -> list[str]:
        """Names of the declarations this one points at, in field order."""
        nodes = [self.alias] if self.alias is not None else [node for _, node in self.fields]
        names: list[str] = []
        for node in nodes:
            while isinstance(node, ArrayOf):
                node = node.items
            if isinstance(node, Reference) and node.name not in names:
                names.append(node.name)
        return names
