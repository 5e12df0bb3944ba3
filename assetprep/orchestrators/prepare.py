"""Preparation orchestrator.

Coordinates the complete flow from a local directory to an action plan.
"""

import asyncio
import logging
from pathlib import Path

from assetprep.config import Settings
from assetprep.domain.models import ActionPlan, RemoteObject
from assetprep.domain.services import ActionPlanService
from assetprep.files.collection import FileCollection
from assetprep.manifest import write_manifest
from assetprep.scheduling.jobs import JobQueue, worker_pool
from assetprep.ui import Reporter

logger = logging.getLogger(__name__)


class Preparation:
    """Orchestrates asset preparation.

    This orchestrator coordinates the entire flow:
    1. Discover files and compute their metadata
    2. Apply the configured strategies
    3. Compare against remote state and plan actions
    4. Optionally write the plan to a manifest
    """

    def __init__(self, config: Settings | None = None):
        """Initialize the orchestrator.

        Args:
            config: Preparation settings. If None, creates new Settings() from environment.
        """
        self.config = config if config is not None else Settings()
        self.plan_service = ActionPlanService()

    def prepare(
        self,
        source_dir: str | Path,
        remote: dict[str, RemoteObject] | None = None,
        reporter: Reporter | None = None,
        manifest_path: str | Path | None = None,
    ) -> ActionPlan:
        """Run the preparation workflow to completion.

        Args:
            source_dir: Directory holding the assets
            remote: Remote objects keyed by path, empty when nothing is deployed
            reporter: Optional reporter for progress and results
            manifest_path: Write the plan here when given

        Returns:
            The action plan
        """
        return asyncio.run(self.prepare_async(source_dir, remote, reporter, manifest_path))

    async def prepare_async(
        self,
        source_dir: str | Path,
        remote: dict[str, RemoteObject] | None = None,
        reporter: Reporter | None = None,
        manifest_path: str | Path | None = None,
    ) -> ActionPlan:
        """Awaitable variant of ``prepare``."""
        if reporter is None:
            reporter = Reporter(silent=True)

        async with worker_pool(self.config.max_hash_workers) as queue:
            files = await self.scan_async(source_dir, reporter, queue=queue)
            prepared = await files.apply_strategy([s.value for s in self.config.strategies])

        plan = self.plan_service.plan(prepared, remote, self.config.delete_orphans)
        logger.info(f"Planned {plan!r}")
        reporter.report_plan(plan)

        if manifest_path is not None:
            write_manifest(plan, manifest_path)
            reporter.report_manifest(manifest_path)

        return plan

    async def scan_async(
        self,
        source_dir: str | Path,
        reporter: Reporter | None = None,
        queue: JobQueue | None = None,
    ) -> FileCollection:
        """Discover files under ``source_dir`` with progress reporting.

        Args:
            source_dir: Directory holding the assets
            reporter: Optional reporter for progress
            queue: Job queue to use, a private worker pool runs when omitted

        Returns:
            Ready FileCollection
        """
        if reporter is None:
            reporter = Reporter(silent=True)

        reporter.report_scan_start(source_dir)
        with reporter.hashing_context():
            files = await FileCollection.from_path(
                source_dir,
                queue=queue,
                max_workers=self.config.max_hash_workers,
                max_stat_concurrency=self.config.max_stat_concurrency,
                include_hidden=self.config.include_hidden,
                chunk_size=self.config.chunk_size,
                staging_dir=self.config.staging_dir,
                gzip_level=self.config.gzip_level,
                progress_hook=reporter.create_hashing_progress_hook(),
            )
        reporter.report_scan_complete(len(files))
        return files

    def scan(self, source_dir: str | Path, reporter: Reporter | None = None) -> FileCollection:
        """Discover files under ``source_dir`` and compute their metadata."""
        return asyncio.run(self.scan_async(source_dir, reporter))
