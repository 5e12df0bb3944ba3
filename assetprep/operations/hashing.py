"""Content digests and MIME detection."""

import hashlib
import mimetypes
from pathlib import Path

FALLBACK_MIME = "application/octet-stream"
GZIP_MIME = "application/gzip"
SNIFF_BYTES = 512


def compute_md5(file_path: Path, chunk_size: int = 64 * 1024) -> str:
    """Compute MD5 hash of a file.

    Args:
        file_path: Path to the file
        chunk_size: Size of chunks to read (default 64KB)

    Returns:
        Lowercase hexadecimal MD5 digest
    """
    md5_hash = hashlib.md5()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            md5_hash.update(chunk)
    return md5_hash.hexdigest()


def read_head(file_path: Path, size: int = SNIFF_BYTES) -> bytes:
    """Return up to ``size`` leading bytes of a file."""
    with open(file_path, "rb") as f:
        return f.read(size)


def guess_mime(path: str | Path | None) -> str | None:
    """Guess a MIME type from a file name.

    Encoding suffixes such as ``.gz`` are ignored, so ``app.js.gz`` maps to the
    JavaScript type. Returns None when the extension is unknown.
    """
    if not path:
        return None
    mime, _encoding = mimetypes.guess_type(str(path), strict=False)
    return mime


def _looks_like_text(head: bytes) -> bool:
    if b"\x00" in head:
        return False
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multi-byte sequence may be cut at the end of the sniff window
        return exc.start >= len(head) - 3 and exc.reason == "unexpected end of data"
    return True


def detect_mime(path_hint: str | Path | None, head: bytes) -> str:
    """Detect a MIME type from a path hint, falling back to content sniffing.

    Args:
        path_hint: File name used for the extension lookup
        head: Leading bytes of the file content

    Returns:
        A concrete MIME type, ``text/plain`` for unrecognised text, or
        ``application/octet-stream`` when nothing better is known
    """
    mime = guess_mime(path_hint)
    if mime:
        return mime
    if head and _looks_like_text(head):
        return "text/plain"
    return FALLBACK_MIME
