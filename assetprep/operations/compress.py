"""Gzip compression for derived files."""

import gzip
import os
import shutil
import tempfile
from pathlib import Path


def reserve_staging_path(staging_dir: Path, name: str) -> Path:
    """Create an empty, uniquely named ``.gz`` file for ``name`` under ``staging_dir``.

    ``name`` is a relative POSIX path; its directories are kept so staged
    output mirrors the asset tree. Every call returns a new file, so two
    derivatives never share a destination, and a destination is never an
    existing source.

    Args:
        staging_dir: Root of the staging area
        name: Logical path of the file being compressed

    Returns:
        Path of the reserved file
    """
    relative = Path(str(name).lstrip("/"))
    target_dir = staging_dir / relative.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    fd, reserved = tempfile.mkstemp(dir=target_dir, prefix=f"{relative.name}.", suffix=".gz")
    os.close(fd)
    return Path(reserved)


def gzip_file(source: Path, dest: Path, compresslevel: int = 9, chunk_size: int = 64 * 1024) -> None:
    """Compress ``source`` into ``dest``.

    The gzip header carries no timestamp and no file name, so the same input
    always produces the same bytes (and the same MD5).

    Args:
        source: File to compress
        dest: Destination path, parent directories are created as needed
        compresslevel: zlib compression level (1-9)
        chunk_size: Size of chunks to copy

    Raises:
        ValueError: If ``dest`` is ``source``
    """
    if Path(dest).resolve() == Path(source).resolve():
        raise ValueError(f"Refusing to compress {source} onto itself")
    dest.parent.mkdir(parents=True, exist_ok=True)
    with open(source, "rb") as src, open(dest, "wb") as raw:
        with gzip.GzipFile(
            filename="", mode="wb", fileobj=raw, compresslevel=compresslevel, mtime=0
        ) as gz:
            shutil.copyfileobj(src, gz, chunk_size)
