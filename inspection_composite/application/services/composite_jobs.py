"""Run many composite jobs in parallel."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from ...domain.entities.image import AnnotationMetadata, CompositeResult
from ...domain.value_objects.config import QualityVerdict
from ..ports.event_publisher import RenderEvent
from .compositor import Compositor, ImageSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositeJob:
    """One finalize action: inputs plus where to write the composite."""
    source: ImageSource
    detail: ImageSource
    output_path: Path
    verdict: Any = QualityVerdict.NEUTRAL
    metadata: AnnotationMetadata | None = None


@dataclass
class JobOutcome:
    """Result or error for a single job."""
    job: CompositeJob
    result: CompositeResult | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.result is not None


@dataclass
class BatchResult:
    """Result of a batch of composite jobs."""
    total: int
    successful: int
    failed: int
    processing_time_ms: float
    outcomes: list[JobOutcome]

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total == 0:
            return 0.0
        return self.successful / self.total


def default_worker_count(cap: int = 4) -> int:
    """Worker threads to use: CPU count, capped."""
    return max(1, min(cap, os.cpu_count() or 1))


class CompositeJobRunner:
    """Fan composite jobs out over a thread pool.

    Jobs share nothing but the Compositor, which keeps no per-job state.
    A job that has started always runs to completion.
    """

    def __init__(self, compositor: Compositor | None = None, max_workers: int | None = None):
        self._compositor = compositor or Compositor()
        self._max_workers = max_workers or default_worker_count(
            self._compositor.config.max_workers
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def _run_one(self, job: CompositeJob) -> JobOutcome:
        try:
            result = self._compositor.compose(
                job.source, job.detail, job.verdict, job.metadata, job.output_path
            )
            return JobOutcome(job=job, result=result)
        except Exception as e:
            logger.exception(f"Composite job failed for {job.output_path}")
            return JobOutcome(job=job, error=e)

    def run(
        self,
        jobs: list[CompositeJob],
        progress_callback: Callable[[int, int, str], None] | None = None
    ) -> BatchResult:
        """Run all jobs and wait for them.

        Args:
            jobs: Jobs to run
            progress_callback: Optional callback(done, total, message)

        Returns:
            BatchResult with outcomes in job order
        """
        start_time = time.time()
        total = len(jobs)
        outcomes: list[JobOutcome | None] = [None] * total
        events = self._compositor.events

        events.publish(RenderEvent(
            stage="batch_start",
            message=f"Starting batch of {total} composites",
            progress=0.0
        ))

        done = 0
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="composite"
        ) as pool:
            futures = {pool.submit(self._run_one, job): i for i, job in enumerate(jobs)}
            for future in as_completed(futures):
                index = futures[future]
                outcome = future.result()
                outcomes[index] = outcome
                done += 1
                message = f"{'Finished' if outcome.success else 'Failed'} {Path(outcome.job.output_path).name}"
                if progress_callback:
                    progress_callback(done, total, message)
                events.publish(RenderEvent(
                    stage="batch_progress",
                    message=message,
                    progress=done / total,
                    output_path=Path(outcome.job.output_path)
                ))

        finished = [o for o in outcomes if o is not None]
        successful = sum(1 for o in finished if o.success)
        elapsed = (time.time() - start_time) * 1000

        events.publish(RenderEvent(
            stage="batch_complete",
            message=f"Batch complete: {successful}/{total} succeeded",
            progress=1.0
        ))
        logger.info(f"Batch complete: {successful}/{total} succeeded in {elapsed:.0f} ms")

        return BatchResult(
            total=total,
            successful=successful,
            failed=total - successful,
            processing_time_ms=elapsed,
            outcomes=finished
        )

    async def run_async(self, jobs: list[CompositeJob]) -> list[JobOutcome]:
        """Await all jobs concurrently from an event loop."""
        semaphore = asyncio.Semaphore(self._max_workers)

        async def _guarded(job: CompositeJob) -> JobOutcome:
            async with semaphore:
                return await asyncio.to_thread(self._run_one, job)

        return list(await asyncio.gather(*(_guarded(job) for job in jobs)))
