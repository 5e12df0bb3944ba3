"""Ordered collection of Files with transformation strategies."""

import asyncio
import logging
import os
import tempfile
from collections.abc import Awaitable, Iterable, Sequence
from pathlib import Path

from assetprep.files.file import File
from assetprep.files.gzipped import GzippedFile
from assetprep.files.strategy import Strategy, parse_strategies
from assetprep.operations.scan import list_files
from assetprep.scheduling.jobs import JobQueue, worker_pool
from assetprep.types import ProgressHook

logger = logging.getLogger(__name__)

DEFAULT_STAT_CONCURRENCY = 100


class FileCollection(Sequence[File]):
    """Immutable ordered sequence of Files keyed by ``path``.

    Strategy methods never modify the collection they are called on; each
    returns a new, ready collection.

    Example:
        files = await FileCollection.from_path("site")
        prepared = await files.apply_strategy(["clone", "gzip-suffix"])
    """

    def __init__(
        self,
        files: Iterable[File] | None = None,
        *,
        queue: JobQueue | None = None,
        staging_dir: str | Path | None = None,
        gzip_level: int = 9,
    ):
        """Initialize the collection.

        Args:
            files: Initial files, order is preserved
            queue: Job queue used by derived files (gzip strategies)
            staging_dir: Directory receiving compressed output. A temporary
                directory is created on first use when omitted.
            gzip_level: Compression level for gzip strategies
        """
        self._files: tuple[File, ...] = tuple(files or ())
        self.queue = queue
        self.staging_dir = Path(staging_dir) if staging_dir else None
        self.gzip_level = gzip_level

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._derive(self._files[index])
        return self._files[index]

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"FileCollection({len(self._files)} files)"

    @property
    def paths(self) -> list[str]:
        """Return member paths in collection order."""
        return [file.path for file in self._files]

    def _derive(self, files: Iterable[File]) -> "FileCollection":
        return FileCollection(
            files,
            queue=self.queue,
            staging_dir=self.staging_dir,
            gzip_level=self.gzip_level,
        )

    async def ready(self) -> "FileCollection":
        """Wait for every member and return the collection.

        Every member is awaited to completion, even after a failure.

        Raises:
            OSError: The failure of the first failed member in collection order
        """
        results = await asyncio.gather(
            *(file.readiness for file in self._files), return_exceptions=True
        )
        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            if len(errors) > 1:
                logger.warning(f"{len(errors)} of {len(self._files)} files failed to become ready")
            raise errors[0]
        return self

    def index_of(self, path: object) -> int:
        """Return the index of the first member with ``path``, or -1.

        Non-string (or empty) arguments are looked up by identity instead.
        """
        if not isinstance(path, str) or not path:
            for index, file in enumerate(self._files):
                if file is path:
                    return index
            return -1
        for index, file in enumerate(self._files):
            if file.path == path:
                return index
        return -1

    def _staging_for(self, strategy: Strategy) -> Path:
        if self.staging_dir is None:
            self.staging_dir = Path(tempfile.mkdtemp(prefix="assetprep-"))
            logger.info(f"Staging compressed files in {self.staging_dir}")
        return self.staging_dir / strategy.value

    async def apply_clone_strategy(self) -> "FileCollection":
        """Return a ready collection of clones, in the same order."""
        return await self._derive(file.clone() for file in self._files).ready()

    async def _gzip(self, strategy: Strategy, suffix: bool) -> "FileCollection":
        staging = self._staging_for(strategy)
        gzips = []
        for file in self._files:
            gzipped = GzippedFile(file, staging, queue=self.queue, compresslevel=self.gzip_level)
            if suffix and not gzipped.path.endswith(".gz"):
                gzipped.path += ".gz"
            gzips.append(gzipped)
        return await self._derive(gzips).ready()

    async def apply_gzip_strategy(self) -> "FileCollection":
        """Return a ready collection of gzip-compressed derivatives."""
        return await self._gzip(Strategy.GZIP, suffix=False)

    async def apply_gzip_suffix_strategy(self) -> "FileCollection":
        """Gzip every member and make sure each path ends in ``.gz``."""
        return await self._gzip(Strategy.GZIP_SUFFIX, suffix=True)

    def _run_strategy(self, strategy: Strategy) -> Awaitable["FileCollection"]:
        if strategy is Strategy.CLONE:
            return self.apply_clone_strategy()
        if strategy is Strategy.GZIP:
            return self.apply_gzip_strategy()
        return self.apply_gzip_suffix_strategy()

    def apply_strategy(self, strategy: str | Sequence[str]) -> Awaitable["FileCollection"]:
        """Apply one or more strategies and merge their results.

        Each strategy runs against this collection (they are not chained), so
        ``["clone", "gzip"]`` yields both the plain and the compressed
        variant of every file. The merged files are sorted by ``path``.

        The selector is validated immediately, before any work starts.

        Args:
            strategy: One of clone, gzip, gzip-suffix, or a list of them

        Returns:
            Awaitable resolving to a new, ready FileCollection

        Raises:
            TypeError: If the selector is empty or of the wrong type
            ValueError: If a strategy name is unknown
        """
        strategies = parse_strategies(strategy)
        return self._apply_strategies(strategies)

    async def _apply_strategies(self, strategies: list[Strategy]) -> "FileCollection":
        logger.info(f"Applying {', '.join(s.value for s in strategies)} to {len(self)} files")
        results = await asyncio.gather(*(self._run_strategy(s) for s in strategies))

        merged: list[File] = []
        for result in results:
            merged.extend(result)
        merged.sort(key=lambda file: file.path)

        return await self._derive(merged).ready()

    @classmethod
    async def from_path(
        cls,
        directory: str | Path,
        *,
        queue: JobQueue | None = None,
        max_workers: int | None = None,
        max_stat_concurrency: int = DEFAULT_STAT_CONCURRENCY,
        include_hidden: bool = False,
        chunk_size: int = 64 * 1024,
        staging_dir: str | Path | None = None,
        gzip_level: int = 9,
        progress_hook: ProgressHook | None = None,
    ) -> "FileCollection":
        """Discover every file under ``directory`` and wait for its metadata.

        Args:
            directory: Root of the asset tree
            queue: Job queue bounding hash/MIME work. Without one a worker
                pool of ``max_workers`` runs for the duration of the scan.
            max_workers: Pool size when no queue is given (default: CPU count)
            max_stat_concurrency: Maximum concurrent stat calls
            include_hidden: Include dot-files and dot-directories
            chunk_size: Read size used while hashing
            staging_dir: Passed on to the resulting collection
            gzip_level: Passed on to the resulting collection
            progress_hook: Optional callback(path, done, total)

        Returns:
            A ready FileCollection with ``path`` relative to ``directory``

        Raises:
            OSError: If traversal, stat or hashing fails
        """
        if queue is None:
            async with worker_pool(max_workers or os.cpu_count() or 1) as pool_queue:
                collection = await cls.from_path(
                    directory,
                    queue=pool_queue,
                    max_stat_concurrency=max_stat_concurrency,
                    include_hidden=include_hidden,
                    chunk_size=chunk_size,
                    staging_dir=staging_dir,
                    gzip_level=gzip_level,
                    progress_hook=progress_hook,
                )
            collection.queue = None
            return collection

        root = Path(directory).resolve()
        entries = await asyncio.to_thread(list_files, root, include_hidden)
        total = len(entries)
        logger.info(f"Found {total} files under {root}")

        semaphore = asyncio.Semaphore(max(1, max_stat_concurrency))
        done = 0

        async def _load(relative: str) -> File:
            nonlocal done
            local_path = root / relative
            async with semaphore:
                stat = await asyncio.to_thread(os.stat, local_path)
            file = File(
                local_path=local_path,
                path=relative,
                size=stat.st_size,
                queue=queue,
                chunk_size=chunk_size,
            )
            await file.ready()
            done += 1
            if progress_hook:
                progress_hook(relative, done, total)
            return file

        files = await asyncio.gather(*(_load(entry) for entry in entries))
        collection = cls(files, queue=queue, staging_dir=staging_dir, gzip_level=gzip_level)
        return await collection.ready()
