"""Directory discovery."""

import os
from pathlib import Path


def _raise(error: OSError) -> None:
    raise error


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def list_files(root: Path, include_hidden: bool = False) -> list[str]:
    """List regular (non-directory) entries under ``root``.

    Args:
        root: Directory to traverse
        include_hidden: Include dot-files and descend into dot-directories

    Returns:
        Sorted POSIX-style paths relative to ``root``

    Raises:
        OSError: If ``root`` or any subdirectory cannot be listed
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    results = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        if not include_hidden:
            dirnames[:] = [d for d in dirnames if not _is_hidden(d)]
            filenames = [f for f in filenames if not _is_hidden(f)]
        for filename in filenames:
            results.append((Path(dirpath) / filename).relative_to(root).as_posix())

    results.sort()
    return results
