"""Gzip-compressed derivative of a File."""

import asyncio
import logging
from pathlib import Path

from assetprep.files.file import File
from assetprep.operations.compress import gzip_file, reserve_staging_path
from assetprep.operations.hashing import GZIP_MIME
from assetprep.scheduling.jobs import JobQueue

logger = logging.getLogger(__name__)


class GzippedFile(File):
    """A File whose content is the gzip compression of another File.

    The compressed bytes are written to a uniquely named file under
    ``staging_dir`` (``<dir of path>/<name>.<random>.gz``), which becomes this
    file's ``local_path`` once compression has finished. ``md5`` and ``size``
    describe the compressed bytes, ``mime`` is ``application/gzip``, and the
    original type is kept in ``original_mime`` next to ``encoding = "gzip"``.
    """

    encoding = "gzip"

    def __init__(
        self,
        source: File,
        staging_dir: Path,
        *,
        queue: JobQueue | None = None,
        compresslevel: int = 9,
    ):
        super().__init__(path=source.path, headers=source.headers, chunk_size=source.chunk_size)
        self.source = source
        self.staging_dir = Path(staging_dir)
        self.original_mime = source.mime
        self.compresslevel = compresslevel
        self._readiness = self._schedule(self._compress, queue)

    async def _compress(self) -> "GzippedFile":
        await self.source.ready()
        if self.source.local_path is None:
            raise FileNotFoundError(f"No local content to compress for {self.source.path!r}")

        self.original_mime = self.source.mime
        dest = await asyncio.to_thread(
            reserve_staging_path, self.staging_dir, self.source.path or self.source.local_path.name
        )
        await asyncio.to_thread(
            gzip_file,
            self.source.local_path,
            dest,
            self.compresslevel,
            self.chunk_size,
        )
        self.local_path = dest
        await self.stat()
        await self.calculate_md5()
        self.set_mime(GZIP_MIME)
        logger.debug(f"Compressed {self.source.local_path} -> {self.local_path} ({self.size} bytes)")
        return self
