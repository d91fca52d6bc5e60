"""Bruno -> OpenAPI contract assembler.

Each parsed document becomes one operation under its normalized path. A
later document with the same (path, method) replaces the earlier one.
Bodies and docs payloads that are not valid JSON simply contribute no
schema. A document whose operation cannot be built is skipped and the rest
of the contract is still assembled.
"""

import json
import logging
import re
from typing import Any, Callable, Iterable

from bruno_api.converter.models import (
    JSON_MEDIA_TYPE,
    Contract,
    ConversionOptions,
    HeaderParameter,
    Info,
    MediaType,
    Operation,
    RequestBody,
    Response,
    Server,
    Tag,
)
from bruno_api.generator.inference import infer
from bruno_api.generator.naming import function_name_to_type_name, url_to_function_name
from bruno_api.generator.render import to_json_schema
from bruno_api.parser.base import ParsedBruFile
from bruno_api.parser.docs import extract_json_from_docs
from bruno_api.parser.urls import normalize_url

logger = logging.getLogger(__name__)


def build_contract(
    documents: Iterable[tuple[ParsedBruFile, str]],
    options: ConversionOptions | None = None,
    on_error: Callable[[ParsedBruFile, Exception], None] | None = None,
) -> Contract:
    """Assemble (document, domain) pairs into a contract.

    `on_error` is called for every document skipped because its operation
    could not be built.
    """
    options = options or ConversionOptions()
    paths: dict[str, dict[str, Operation]] = {}
    domains: list[str] = []

    for document, domain in documents:
        if not document.is_valid:
            logger.info("Skipping %r in %s: no request URL", document.meta.name, domain)
            continue

        path = normalize_url(document.request.url)
        method = document.request.method.lower()
        try:
            operation = build_operation(document, domain)
        except (RecursionError, ValueError) as e:
            logger.warning("Skipping %s %s: %s", method.upper(), path, e)
            if on_error:
                on_error(document, e)
            continue

        methods = paths.setdefault(path, {})
        if method in methods:
            logger.debug("%s %s defined twice, keeping the later one", method.upper(), path)
        methods[method] = operation

        if domain not in domains:
            domains.append(domain)

    return Contract(
        info=Info(title=options.title, version=options.version, description=options.description),
        servers=[Server(url=options.base_url)] if options.base_url else None,
        paths=paths,
        tags=[Tag(name=domain, description=f"{domain} related endpoints") for domain in domains],
    )


def build_operation(document: ParsedBruFile, domain: str) -> Operation:
    method = document.request.method
    path = normalize_url(document.request.url)
    function_name = url_to_function_name(method, path)

    parameters = [
        HeaderParameter(name=name, example=value)
        for name, value in (document.headers or {}).items()
    ]

    request_body = None
    body = _load_body(document)
    if body is not None:
        seed = function_name_to_type_name(function_name, "Request")
        request_body = RequestBody(content={JSON_MEDIA_TYPE: _media_type(body, seed)})

    response = Response()
    payload = extract_json_from_docs(document.docs)
    if payload is not None:
        seed = function_name_to_type_name(function_name, "Response")
        response = Response(content={JSON_MEDIA_TYPE: _media_type(payload, seed)})

    return Operation(
        tags=[domain],
        summary=document.meta.name or f"{method} {path}",
        operation_id=generate_operation_id(method, path, domain),
        parameters=parameters,
        request_body=request_body,
        responses={"200": response},
    )


def generate_operation_id(method: str, path: str, domain: str) -> str:
    """`GET /api/users/{id}` in `users` -> `get-users-api-users-id`."""
    clean_path = re.sub(r"[{}]", "", path).replace("/", "-")
    operation_id = f"{method.lower()}-{domain}-{clean_path}"
    return re.sub(r"-{2,}", "-", operation_id).strip("-")


def infer_schema(value: Any, seed_name: str) -> dict:
    return to_json_schema(infer(value, seed_name))


def _media_type(value: Any, seed_name: str) -> MediaType:
    return MediaType(schema_=infer_schema(value, seed_name), example=value)


def _load_body(document: ParsedBruFile) -> Any | None:
    if document.body is None or not document.body.raw_content:
        return None
    try:
        return json.loads(document.body.raw_content)
    except (json.JSONDecodeError, RecursionError):
        logger.debug("Request body of %r is not valid JSON", document.meta.name)
        return None
