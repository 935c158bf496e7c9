"""Tests for parallel composite jobs."""

import asyncio

from ..application.services.composite_jobs import (
    BatchResult,
    CompositeJob,
    CompositeJobRunner,
    default_worker_count,
)
from ..application.services.compositor import Compositor
from ..domain.value_objects.config import QualityVerdict
from ..exceptions import MissingSourceFile


def _jobs(tmp_path, source_image, detail_image):
    return [
        CompositeJob(source_image, detail_image, tmp_path / "one.png", QualityVerdict.GOOD),
        CompositeJob(tmp_path / "missing.png", detail_image, tmp_path / "two.png"),
        CompositeJob(source_image, detail_image, tmp_path / "three.png", QualityVerdict.BAD),
    ]


def test_default_worker_count_cap() -> None:
    """Default worker count should stay between one and the cap."""
    assert 1 <= default_worker_count() <= 4
    assert default_worker_count(cap=1) == 1


def test_runner_uses_config_cap() -> None:
    runner = CompositeJobRunner(Compositor())
    assert 1 <= runner.max_workers <= 4
    assert CompositeJobRunner(max_workers=2).max_workers == 2


def test_batch_mixed_outcomes(tmp_path, source_image, detail_image) -> None:
    """One failing job does not affect the others."""
    jobs = _jobs(tmp_path, source_image, detail_image)
    progress = []
    result = CompositeJobRunner(max_workers=3).run(
        jobs, lambda done, total, message: progress.append((done, total))
    )

    assert result.total == 3
    assert result.successful == 2
    assert result.failed == 1
    assert abs(result.success_rate - 2 / 3) < 1e-9
    assert [o.job for o in result.outcomes] == jobs
    assert isinstance(result.outcomes[1].error, MissingSourceFile)
    assert (tmp_path / "one.png").is_file()
    assert (tmp_path / "three.png").is_file()
    assert not (tmp_path / "two.png").exists()
    assert sorted(progress) == [(1, 3), (2, 3), (3, 3)]


def test_batch_events(tmp_path, source_image, detail_image) -> None:
    compositor = Compositor()
    stages = []
    compositor.subscribe_to_events(lambda event: stages.append(event.stage))
    CompositeJobRunner(compositor, max_workers=2).run(_jobs(tmp_path, source_image, detail_image))
    assert stages[0] == "batch_start"
    assert stages[-1] == "batch_complete"
    assert stages.count("batch_progress") == 3


def test_empty_batch() -> None:
    result = CompositeJobRunner().run([])
    assert isinstance(result, BatchResult)
    assert result.total == 0
    assert result.success_rate == 0.0
    assert result.outcomes == []


def test_run_async(tmp_path, source_image, detail_image) -> None:
    jobs = _jobs(tmp_path, source_image, detail_image)
    outcomes = asyncio.run(CompositeJobRunner(max_workers=2).run_async(jobs))
    assert [o.success for o in outcomes] == [True, False, True]
    assert outcomes[0].result.output_path == tmp_path / "one.png"
