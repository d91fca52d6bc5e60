"""CLI entry point for bruno-api."""

import logging
from pathlib import Path

import click
import yaml

from bruno_api.converter.collect import Collection, collect_documents, convert_directory
from bruno_api.converter.models import Contract, ConversionOptions
from bruno_api.generator.inference import infer, merge_forests
from bruno_api.generator.naming import function_name_to_type_name, url_to_function_name
from bruno_api.generator.render import render_typescript
from bruno_api.parser.bru import parse_bru_file
from bruno_api.parser.docs import extract_json_from_docs

INPUT_DIR = click.Path(exists=True, file_okay=False, path_type=Path)


def _serialize(contract: Contract, output: Path, fmt: str) -> str:
    if fmt == "auto":
        fmt = "yaml" if output.suffix.lower() in (".yaml", ".yml") else "json"
    if fmt == "yaml":
        return yaml.safe_dump(contract.to_dict(), sort_keys=False, allow_unicode=True)
    return contract.model_dump_json(indent=2, by_alias=True, exclude_none=True) + "\n"


def _report_failures(collection: Collection) -> None:
    for failure in collection.failures:
        click.echo(f"  Warning: failed to parse {failure.path}: {failure.error}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Bruno API: OpenAPI contracts and TypeScript types from Bruno collections."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("-i", "--input", "input_dir", default="./bruno", type=INPUT_DIR, help="Bruno collection directory.")
@click.option("-o", "--output", default="./openapi.json", type=click.Path(path_type=Path), help="Output OpenAPI file.")
@click.option("--title", default="API Documentation", help="API title.")
@click.option("--version", default="1.0.0", help="API version.")
@click.option("--description", default=None, help="API description.")
@click.option("--base-url", default=None, help="Base URL for the servers list.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
def generate(
    input_dir: Path,
    output: Path,
    title: str,
    version: str,
    description: str | None,
    base_url: str | None,
    fmt: str,
):
    """Generate an OpenAPI spec from a Bruno collection."""
    click.echo(f"Parsing {input_dir}...")
    options = ConversionOptions(title=title, version=version, description=description, base_url=base_url)
    contract, collection = convert_directory(input_dir, options)
    _report_failures(collection)

    operations = sum(len(methods) for methods in contract.paths.values())
    click.echo(f"Found {len(collection.documents)} files, {operations} operations.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_serialize(contract, output, fmt), encoding="utf-8")
    click.echo(f"OpenAPI spec saved to {output}")


@main.command()
@click.option("-i", "--input", "input_dir", default="./bruno", type=INPUT_DIR, help="Bruno collection directory.")
@click.option("-o", "--output", default="./types.ts", type=click.Path(path_type=Path), help="Output TypeScript file.")
def types(input_dir: Path, output: Path):
    """Generate TypeScript response types from docs examples."""
    click.echo(f"Parsing {input_dir}...")
    collection = collect_documents(input_dir)
    _report_failures(collection)

    forests = []
    for source in collection.documents:
        document = source.document
        payload = extract_json_from_docs(document.docs)
        if not document.is_valid or payload is None:
            continue
        function_name = url_to_function_name(document.request.method, document.request.url)
        forests.append(infer(payload, function_name_to_type_name(function_name)))

    declarations = merge_forests(forests)
    click.echo(f"Inferred {len(declarations)} types from {len(forests)} examples.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_typescript(declarations), encoding="utf-8")
    click.echo(f"Types saved to {output}")


@main.command()
@click.argument("bru_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(bru_path: Path):
    """Print a single parsed .bru file as JSON."""
    document = parse_bru_file(bru_path)
    click.echo(document.model_dump_json(indent=2))
