"""Identifier helpers shared by schema seeding and code emitters."""

from bruno_api.generator.inference import to_pascal_case
from bruno_api.parser.urls import normalize_url


def to_camel_case(name: str) -> str:
    name = to_pascal_case(name)
    return name[:1].lower() + name[1:]


def url_to_function_name(method: str, url: str) -> str:
    """`GET /applications/:id/competitors` -> `getApplicationsByIdCompetitors`."""
    parts = []
    for segment in normalize_url(url).split("/"):
        if not segment:
            continue
        if segment.startswith((":", "{")):
            parts.append("ById")
        else:
            parts.append(to_pascal_case(segment))
    return method.lower() + "".join(parts)


def function_name_to_type_name(function_name: str, suffix: str = "Response") -> str:
    return f"{to_pascal_case(function_name)}{suffix}"
