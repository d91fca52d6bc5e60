"""Structural type inference from an example JSON value.

Only the first element of an array is sampled. Every object, at any depth,
becomes one TypeDeclaration named after its key (PascalCase) or, for array
elements, after the array's name plus `Item`. Declarations are keyed by
name only: when two branches derive the same name the later one wins.
"""

import logging
import re
from typing import Any, Iterable

from .types import (
    ANY,
    ANY_ARRAY,
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    ArrayOf,
    Reference,
    TypeDeclaration,
    TypeNode,
)

logger = logging.getLogger(__name__)

_SEPARATED = re.compile(r"[-_](.)")


def to_pascal_case(name: str) -> str:
    """`user-profile` / `user_profile` / `userProfile` -> `UserProfile`."""
    name = _SEPARATED.sub(lambda m: m.group(1).upper(), name)
    return name[:1].upper() + name[1:]


def infer(value: Any, seed_name: str) -> list[TypeDeclaration]:
    """Infer the declaration forest for `value`.

    The declaration named `seed_name` is always last; every other
    declaration appears before the declarations referencing it.
    """
    collector = _Collector()
    if isinstance(value, dict):
        collector.declare(seed_name, value)
    else:
        node = collector.node_for(value, seed_name)
        collector.declarations[seed_name] = TypeDeclaration(seed_name, alias=node)
    return dependency_order(collector.declarations, last=seed_name)


def merge_forests(forests: Iterable[list[TypeDeclaration]]) -> list[TypeDeclaration]:
    """Deduplicate several forests by name, the later declaration winning."""
    merged: dict[str, TypeDeclaration] = {}
    for forest in forests:
        for declaration in forest:
            previous = merged.get(declaration.name)
            if previous is not None and previous != declaration:
                logger.debug("Type %s redeclared with a different shape", declaration.name)
            merged[declaration.name] = declaration
    return dependency_order(merged)


def dependency_order(
    declarations: dict[str, TypeDeclaration], last: str | None = None
) -> list[TypeDeclaration]:
    """Order declarations so dependencies come first, keeping `last` at the end."""
    ordered: dict[str, TypeDeclaration] = {}

    def visit(name: str, trail: set[str]) -> None:
        if name in ordered or name in trail or name not in declarations:
            return
        trail.add(name)
        for dependency in declarations[name].references():
            visit(dependency, trail)
        ordered[name] = declarations[name]

    for name in declarations:
        if name != last:
            visit(name, {last} if last else set())
    if last in declarations:
        visit(last, set())
    return list(ordered.values())


class _Collector:
    def __init__(self):
        self.declarations: dict[str, TypeDeclaration] = {}

    def declare(self, name: str, obj: dict) -> Reference:
        fields = tuple(
            (key, self.node_for(value, to_pascal_case(key))) for key, value in obj.items()
        )
        self.declarations[name] = TypeDeclaration(name, fields)
        return Reference(name)

    def node_for(self, value: Any, name: str) -> TypeNode:
        if value is None:
            return NULL
        if isinstance(value, bool):
            return BOOLEAN
        if isinstance(value, (int, float)):
            return NUMBER
        if isinstance(value, str):
            return STRING
        if isinstance(value, list):
            if not value:
                return ANY_ARRAY
            first = value[0]
            if isinstance(first, dict):
                return ArrayOf(self.declare(f"{name}Item", first))
            return ArrayOf(self.node_for(first, name))
        if isinstance(value, dict):
            return self.declare(name, value)
        return ANY
