"""Asset preparation SDK.

A Python library for preparing static asset trees for deployment: file
discovery, asynchronous MD5 / MIME computation, clone and gzip strategies, and
upload / header / delete action planning.

Quick Start (High-Level API):
    >>> from assetprep import prepare_directory
    >>> plan = prepare_directory("site")  # Plans an upload for every file

Quick Start (SDK API):
    >>> from assetprep import Preparation, Settings
    >>> config = Settings(strategies=["clone", "gzip-suffix"])
    >>> plan = Preparation(config).prepare("site")

Async API:
    >>> files = await FileCollection.from_path("site")
    >>> prepared = await files.apply_strategy(["clone", "gzip"])

Configuration:
    >>> import os
    >>> os.environ["ASSETPREP_MAX_HASH_WORKERS"] = "8"
    >>> config = Settings()  # Loads from environment

Public API:
    High-level functions:
        - prepare_directory: Discover, transform and plan actions
        - scan_directory: Discover files and compute metadata

    Orchestrators:
        - Preparation: Full workflow orchestration

    Configuration:
        - Settings: Configuration model

    Files:
        - File: A file and its lazily computed metadata
        - GzippedFile: Gzip-compressed derivative of a File
        - FileCollection: Ordered collection with strategies
        - Strategy: Strategy vocabulary (clone, gzip, gzip-suffix)

    Scheduling:
        - JobQueue, Worker, worker_pool: Bounded-concurrency job execution

    Domain Models:
        - Action: Upload / header / delete intent for one path
        - ActionPlan: Planned actions and unchanged paths
        - RemoteObject: Metadata of an object in remote storage

    Reporters (for custom UIs):
        - Reporter: Progress reporter (use silent=True for headless mode)
"""

# Configuration
from assetprep.config import Settings

# Domain models
from assetprep.domain import Action, ActionPlan, ActionPlanService, RemoteObject

# Files
from assetprep.files import File, FileCollection, GzippedFile, Strategy

# Orchestrators
from assetprep.orchestrators import Preparation

# Scheduling
from assetprep.scheduling import JobQueue, Worker, worker_pool

# UI Reporters
from assetprep.ui import Reporter

__all__ = [
    # High-level functions
    "prepare_directory",
    "scan_directory",
    # Orchestrators
    "Preparation",
    # Configuration
    "Settings",
    # Files
    "File",
    "GzippedFile",
    "FileCollection",
    "Strategy",
    # Scheduling
    "JobQueue",
    "Worker",
    "worker_pool",
    # Domain models
    "Action",
    "ActionPlan",
    "ActionPlanService",
    "RemoteObject",
    # Reporters
    "Reporter",
]

# Version
__version__ = "0.1.0"


def prepare_directory(
    source_dir,
    config: Settings | None = None,
    remote: dict[str, RemoteObject] | None = None,
    reporter: Reporter | None = None,
    manifest_path=None,
) -> ActionPlan:
    """Prepare a directory for deployment (high-level convenience function).

    Args:
        source_dir: Directory holding the assets
        config: Preparation settings. If None, loads Settings() from environment.
        remote: Remote objects keyed by path. If None, every file is uploaded.
        reporter: Progress reporter. If None, runs silently.
        manifest_path: Write the plan to this JSON file when given

    Returns:
        The action plan

    Example:
        >>> from assetprep import prepare_directory, Settings
        >>> plan = prepare_directory("site", Settings(strategies=["gzip"]))
        >>> [action.path for action in plan.uploads]
    """
    return Preparation(config).prepare(source_dir, remote, reporter, manifest_path)


def scan_directory(
    source_dir,
    config: Settings | None = None,
    reporter: Reporter | None = None,
) -> FileCollection:
    """Discover files and compute their metadata (high-level convenience function).

    Args:
        source_dir: Directory holding the assets
        config: Preparation settings. If None, loads Settings() from environment.
        reporter: Progress reporter. If None, runs silently.

    Returns:
        Ready FileCollection
    """
    return Preparation(config).scan(source_dir, reporter)
