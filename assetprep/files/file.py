"""A single file and its lazily computed metadata."""

import asyncio
import logging
import os
from collections.abc import Callable, Coroutine
from pathlib import Path, PurePosixPath
from typing import Any

from assetprep.operations.hashing import (
    FALLBACK_MIME,
    compute_md5,
    detect_mime,
    guess_mime,
    read_head,
)
from assetprep.scheduling.jobs import JobQueue

logger = logging.getLogger(__name__)


def _mime_for_bare_name(name: str | Path | None) -> str:
    if not name:
        return FALLBACK_MIME
    stem = PurePosixPath(str(name)).name
    if stem.endswith(".gz"):
        stem = stem[: -len(".gz")]
    if stem and "." not in stem.lstrip("."):
        return "text/plain"
    return FALLBACK_MIME


class File:
    """A filesystem entry (or a virtual one) plus its deployment metadata.

    When ``local_path`` is given and any of ``mime``, ``md5`` or ``size`` is
    missing, the missing fields are computed once in the background. Supplied
    fields are never recomputed. Await ``ready()`` (or ``readiness``) to know
    when computation has finished; it fails with ``OSError`` if the file
    cannot be read.

    Example:
        file = File(local_path="site/index.html", path="index.html", queue=queue)
        await file.ready()
        file.headers["Content-Type"]  # "text/html"
    """

    def __init__(
        self,
        local_path: str | Path | None = None,
        path: str = "",
        mime: str | None = None,
        md5: str | None = None,
        size: int | None = None,
        headers: dict[str, str] | None = None,
        *,
        queue: JobQueue | None = None,
        chunk_size: int = 64 * 1024,
    ):
        """Initialize the file and schedule metadata computation if needed.

        Args:
            local_path: Source on the local filesystem, None for virtual files
            path: Logical destination path
            mime: Known MIME type
            md5: Known lowercase hex MD5 digest
            size: Known size in bytes
            headers: HTTP-style headers, ``Content-Type`` follows ``mime``
            queue: Job queue that bounds metadata work. Without one the work
                runs as a standalone task.
            chunk_size: Read size used while hashing
        """
        self.local_path = Path(local_path) if local_path else None
        self.path = path or ""
        self.mime = mime
        self.md5 = md5
        self.size = size
        self.headers = dict(headers or {})
        self.chunk_size = chunk_size
        self._readiness: asyncio.Future | None = None

        if self.mime:
            self.headers["Content-Type"] = self.mime

        if self.local_path is not None and self.needs_metadata:
            self._readiness = self._schedule(self._compute_metadata, queue)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, mime={self.mime!r}, md5={self.md5!r}, size={self.size!r})"

    @property
    def needs_metadata(self) -> bool:
        """Return True if any of mime, md5 or size is still unknown."""
        return self.mime is None or self.md5 is None or self.size is None

    @property
    def readiness(self) -> asyncio.Future:
        """Future resolved with this file once metadata computation is done."""
        if self._readiness is None:
            self._readiness = asyncio.get_running_loop().create_future()
            self._readiness.set_result(self)
        return self._readiness

    async def ready(self) -> "File":
        """Wait until metadata is available and return the file."""
        await self.readiness
        return self

    def _schedule(
        self,
        job: Callable[[], Coroutine[Any, Any, "File"]],
        queue: JobQueue | None,
    ) -> asyncio.Future:
        if queue is not None:
            return queue.push(job)
        return asyncio.ensure_future(job())

    async def _compute_metadata(self) -> "File":
        if self.size is None:
            await self.stat()
        if self.md5 is None:
            await self.calculate_md5()
        if self.mime is None:
            await self.detect_mime()
        logger.debug(f"Metadata ready for {self.path or self.local_path}")
        return self

    async def stat(self) -> int:
        """Read the size of ``local_path`` from the filesystem."""
        result = await asyncio.to_thread(os.stat, self.local_path)
        self.size = result.st_size
        return self.size

    async def calculate_md5(self) -> str:
        """Hash the content of ``local_path``."""
        self.md5 = await asyncio.to_thread(compute_md5, self.local_path, self.chunk_size)
        return self.md5

    async def detect_mime(self) -> str:
        """Detect the MIME type from the file name and its leading bytes."""
        head = await asyncio.to_thread(read_head, self.local_path)
        mime = detect_mime(self.path or self.local_path, head)
        if mime == FALLBACK_MIME:
            # Content was sniffed as binary, the name rule in set_mime does not apply
            self._assign_mime(mime)
        else:
            self.set_mime(mime)
        return self.mime

    def set_mime(self, mime: str) -> None:
        """Set the MIME type and sync the ``Content-Type`` header.

        The generic ``application/octet-stream`` never replaces a concrete
        type. When no concrete type is known yet, a guess from the path is
        preferred over the generic one, and a name without an extension
        (``LICENSE``, ``LICENSE.gz``) is taken to be ``text/plain``.
        """
        if mime == FALLBACK_MIME:
            if self.mime and self.mime != FALLBACK_MIME:
                mime = self.mime
            else:
                mime = (
                    guess_mime(self.path)
                    or guess_mime(self.local_path)
                    or _mime_for_bare_name(self.path or self.local_path)
                )
        self._assign_mime(mime)

    def _assign_mime(self, mime: str) -> None:
        self.mime = mime
        self.headers["Content-Type"] = mime

    def clone(self) -> "File":
        """Return an independent copy that is ready immediately."""
        twin = File(
            path=self.path,
            mime=self.mime,
            md5=self.md5,
            size=self.size,
            headers=self.headers,
            chunk_size=self.chunk_size,
        )
        twin.local_path = self.local_path
        return twin
