"""Rendering of an inferred declaration forest.

`render_typescript` emits declaration text for code emitters,
`to_json_schema` inlines a forest into an OpenAPI 3.0 schema object.
"""

import json
import re

from .types import ArrayOf, Primitive, Reference, TypeDeclaration, TypeNode

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")

PRIMITIVE_SCHEMAS = {
    "string": {"type": "string"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "null": {"nullable": True},
    "any": {},
}


def render_declaration(declaration: TypeDeclaration) -> str:
    if declaration.alias is not None:
        return f"export type {declaration.name} = {declaration.alias.render()};"
    lines = [f"export interface {declaration.name} {{"]
    for key, node in declaration.fields:
        lines.append(f"  {_property_name(key)}: {node.render()};")
    lines.append("}")
    return "\n".join(lines)


def render_typescript(declarations: list[TypeDeclaration]) -> str:
    return "\n\n".join(render_declaration(d) for d in declarations) + "\n"


def to_json_schema(declarations: list[TypeDeclaration], root: str | None = None) -> dict:
    """Inline the forest into one schema rooted at `root` (default: last declaration)."""
    if not declarations:
        return {}
    table = {d.name: d for d in declarations}
    root_name = root or declarations[-1].name
    return _declaration_schema(table, root_name, set())


def _declaration_schema(table: dict[str, TypeDeclaration], name: str, trail: set[str]) -> dict:
    declaration = table.get(name)
    if declaration is None or name in trail:
        return {"type": "object"}
    trail = trail | {name}
    if declaration.alias is not None:
        return _node_schema(table, declaration.alias, trail)
    return {
        "type": "object",
        "title": name,
        "properties": {key: _node_schema(table, node, trail) for key, node in declaration.fields},
    }


def _node_schema(table: dict[str, TypeDeclaration], node: TypeNode, trail: set[str]) -> dict:
    if isinstance(node, Primitive):
        return dict(PRIMITIVE_SCHEMAS.get(node.name, {}))
    if isinstance(node, ArrayOf):
        return {"type": "array", "items": _node_schema(table, node.items, trail)}
    if isinstance(node, Reference):
        return _declaration_schema(table, node.name, trail)
    raise TypeError(f"Unknown type node: {node!r}")


def _property_name(key: str) -> str:
    if _IDENTIFIER.match(key):
        return key
    return json.dumps(key)
