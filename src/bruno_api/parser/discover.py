"""Bruno collection discovery."""

from pathlib import Path

BRU_SUFFIX = ".bru"
DEFAULT_DOMAIN = "default"


def find_bru_files(directory: Path) -> list[Path]:
    """Depth-first walk collecting .bru files in directory-entry order."""
    files: list[Path] = []
    for entry in directory.iterdir():
        if entry.is_dir():
            files.extend(find_bru_files(entry))
        elif entry.name.endswith(BRU_SUFFIX):
            files.append(entry)
    return files


def extract_domain(file_path: Path, root: Path) -> str:
    """The first folder under the collection root is the domain key."""
    parts = file_path.relative_to(root).parts
    if len(parts) < 2:
        return DEFAULT_DOMAIN
    return parts[0]
