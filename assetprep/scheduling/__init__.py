"""Bounded-concurrency job scheduling."""

from assetprep.scheduling.jobs import Job, JobQueue, Worker, worker_pool

__all__ = ["Job", "JobQueue", "Worker", "worker_pool"]
