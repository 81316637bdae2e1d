"""Filesystem controller discovery.

Walks the controllers directory tree and collects every controller
module. Hidden entries (``.git``, ``.env.py``) and private entries
(``__init__.py``, ``__pycache__``, ``_helpers.py``) are skipped.

Within a directory, subdirectory results come before the directory's
own files. The assembler re-sorts by route specificity afterwards, so
the only hard contract here is completeness.
"""

from collections.abc import Iterable
from pathlib import Path


def find_controllers(
    base_path: str | Path,
    extensions: Iterable[str] = (".py",),
) -> list[Path]:
    """Walk a controllers directory and discover all controller modules.

    Args:
        base_path: Path to the controllers directory.
        extensions: Recognized module extensions.

    Returns:
        Absolute paths of all controller modules.

    Raises:
        FileNotFoundError: If *base_path* is not a directory.
        OSError: If a directory in the tree cannot be read.
    """
    root = Path(base_path).absolute()
    if not root.is_dir():
        raise FileNotFoundError(f"Controllers directory not found: {root}")

    controllers: list[Path] = []
    _walk_directory(root, frozenset(ext.lower() for ext in extensions), controllers)
    return controllers


def _walk_directory(
    directory: Path,
    extensions: frozenset[str],
    controllers: list[Path],
) -> None:
    """Recursively collect controller files, subdirectories first."""
    entries = [item for item in sorted(directory.iterdir()) if _is_visible(item)]

    # Recurse into subdirectories
    for item in entries:
        if item.is_dir():
            _walk_directory(item, extensions, controllers)

    # Then this level's modules
    for item in entries:
        if item.is_file() and item.suffix.lower() in extensions:
            controllers.append(item)


def _is_visible(item: Path) -> bool:
    return not (item.name.startswith(".") or item.name.startswith("_"))
