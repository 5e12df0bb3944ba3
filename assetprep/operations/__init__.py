"""Filesystem operations.

Public API:
    Hashing and MIME detection:
        - compute_md5: Streamed MD5 digest of a file
        - read_head: First bytes of a file for sniffing
        - detect_mime: Guess a MIME type from a path hint and file head
        - guess_mime: Extension based MIME lookup

    Compression:
        - gzip_file: Deterministic gzip compression into a destination path
        - reserve_staging_path: Unique staging destination for a compressed file

    Discovery:
        - list_files: Recursive listing of regular files under a directory
"""

from assetprep.operations.compress import gzip_file, reserve_staging_path
from assetprep.operations.hashing import (
    FALLBACK_MIME,
    GZIP_MIME,
    compute_md5,
    detect_mime,
    guess_mime,
    read_head,
)
from assetprep.operations.scan import list_files

__all__ = [
    "FALLBACK_MIME",
    "GZIP_MIME",
    "compute_md5",
    "detect_mime",
    "guess_mime",
    "read_head",
    "gzip_file",
    "reserve_staging_path",
    "list_files",
]
