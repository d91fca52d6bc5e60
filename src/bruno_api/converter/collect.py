"""Collection-level fold: discover, parse and assemble a Bruno directory.

A file that cannot be read, or whose operation cannot be built, is recorded
as a failure and skipped; it never stops the rest of the collection from
being processed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from bruno_api.converter.models import Contract, ConversionOptions
from bruno_api.converter.openapi import build_contract
from bruno_api.parser.base import ParsedBruFile
from bruno_api.parser.bru import parse_bru_file
from bruno_api.parser.discover import extract_domain, find_bru_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    path: Path
    document: ParsedBruFile
    domain: str


@dataclass(frozen=True)
class FileFailure:
    path: Path
    error: str


@dataclass
class Collection:
    documents: list[SourceDocument] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    def pairs(self) -> list[tuple[ParsedBruFile, str]]:
        return [(source.document, source.domain) for source in self.documents]


def collect_documents(bruno_dir: Path) -> Collection:
    """Parse every .bru file under `bruno_dir`.

    Raises FileNotFoundError if the directory does not exist.
    """
    if not bruno_dir.is_dir():
        raise FileNotFoundError(f"Bruno directory not found: {bruno_dir}")

    collection = Collection()
    for path in find_bru_files(bruno_dir):
        try:
            document = parse_bru_file(path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to parse %s: %s", path, e)
            collection.failures.append(FileFailure(path=path, error=str(e)))
            continue
        domain = extract_domain(path, bruno_dir)
        logger.debug("Parsed %s (domain: %s)", path, domain)
        collection.documents.append(SourceDocument(path=path, document=document, domain=domain))
    return collection


def convert_directory(
    bruno_dir: Path, options: ConversionOptions | None = None
) -> tuple[Contract, Collection]:
    """Build the contract for a whole collection; failures are in the returned Collection."""
    collection = collect_documents(bruno_dir)
    paths_by_document = {id(source.document): source.path for source in collection.documents}

    def record(document: ParsedBruFile, error: Exception) -> None:
        path = paths_by_document[id(document)]
        collection.failures.append(FileFailure(path=path, error=str(error)))

    return build_contract(collection.pairs(), options, on_error=record), collection
