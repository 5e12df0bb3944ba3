"""Job queue and cooperative workers.

A ``JobQueue`` holds pending jobs in FIFO order and raises its ``occupied``
event whenever work is pushed. Each ``Worker`` attached to the queue runs one
job at a time, so N workers sharing one queue bound concurrency to N.

Example:
    async with worker_pool(4) as queue:
        future = queue.push(lambda: expensive())
        result = await future
"""

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

JobFunction = Callable[[], Any]


@dataclass
class Job:
    """A unit of deferred work and the future that receives its outcome."""

    fn: JobFunction
    future: asyncio.Future = field(repr=False)


class JobQueue:
    """FIFO backlog of pending jobs."""

    def __init__(self) -> None:
        self._backlog: deque[Job] = deque()
        self.occupied = asyncio.Event()

    def __len__(self) -> int:
        return len(self._backlog)

    def push(self, fn: JobFunction) -> asyncio.Future:
        """Append a job and return the future bound to its result.

        Must be called from within a running event loop.

        Args:
            fn: Zero-argument callable returning a value or an awaitable

        Returns:
            Future resolved with the job's result, or failed with its exception
        """
        future = asyncio.get_running_loop().create_future()
        self._backlog.append(Job(fn=fn, future=future))
        self.occupied.set()
        return future

    def shift(self) -> Job | None:
        """Remove and return the oldest job, or None when the backlog is empty."""
        if not self._backlog:
            self.occupied.clear()
            return None
        job = self._backlog.popleft()
        if not self._backlog:
            self.occupied.clear()
        return job

    def cancel_pending(self) -> int:
        """Cancel every job that has not started yet.

        Returns:
            Number of cancelled jobs
        """
        cancelled = 0
        while self._backlog:
            job = self._backlog.popleft()
            if job.future.cancel():
                cancelled += 1
        self.occupied.clear()
        return cancelled


class Worker:
    """Consumes a JobQueue one job at a time.

    The worker starts on construction and waits on the queue's ``occupied``
    event whenever the backlog is empty. A failing job fails its own future
    only; the worker keeps draining the queue.
    """

    def __init__(self, queue: JobQueue, name: str | None = None) -> None:
        if not isinstance(queue, JobQueue):
            raise TypeError("Worker expects a JobQueue")
        self.queue = queue
        self.name = name or f"worker-{id(self):x}"
        self.busy = False
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)

    async def _run(self) -> None:
        while True:
            job = self.queue.shift()
            if job is None:
                await self.queue.occupied.wait()
                continue
            await self._execute(job)

    async def _execute(self, job: Job) -> None:
        if job.future.done():
            return

        self.busy = True
        deferred = False
        try:
            result = job.fn()
            if inspect.isawaitable(result):
                deferred = True
                result = await result
        except asyncio.CancelledError:
            job.future.cancel()
            raise
        except Exception as exc:
            logger.debug(f"{self.name}: job {job.fn!r} failed: {exc!r}")
            if not job.future.done():
                job.future.set_exception(exc)
        else:
            if not job.future.done():
                job.future.set_result(result)
        finally:
            self.busy = False

        if not deferred:
            # Let other tasks run between synchronous jobs
            await asyncio.sleep(0)

    @property
    def running(self) -> bool:
        """Return True while the worker task is alive."""
        return not self._task.done()

    async def close(self) -> None:
        """Stop the worker, cancelling the job in flight if any."""
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task


@asynccontextmanager
async def worker_pool(size: int, queue: JobQueue | None = None) -> AsyncIterator[JobQueue]:
    """Run ``size`` workers on a queue for the duration of the block.

    Args:
        size: Number of workers (values below 1 are treated as 1)
        queue: Existing queue to drain. A new one is created if omitted.

    Yields:
        The queue the workers consume
    """
    queue = queue if queue is not None else JobQueue()
    workers = [Worker(queue, name=f"worker-{i}") for i in range(max(1, size))]
    logger.debug(f"Started {len(workers)} workers")
    try:
        yield queue
    finally:
        await asyncio.gather(*(worker.close() for worker in workers))
        cancelled = queue.cancel_pending()
        if cancelled:
            logger.debug(f"Cancelled {cancelled} pending jobs")
