"""Batch planner tests."""

from __future__ import annotations

import math
from pathlib import Path

import pytest
from feature_batch_runner.batch_planning import Batch, BatchArtifacts, plan_batches
from feature_batch_runner.feature_discovery import FeatureFile


def _features(count: int) -> tuple[FeatureFile, ...]:
    return tuple(FeatureFile(path=Path(f"/suite/feature-{index}.feature")) for index in range(count))


def test_zero_features_yield_zero_batches() -> None:
    assert plan_batches((), 4) == ()


def test_five_features_over_two_forks_split_into_three_and_two() -> None:
    features = _features(5)

    batches = plan_batches(features, 2)

    assert [len(batch.features) for batch in batches] == [3, 2]
    assert batches[0].features == features[:3]
    assert batches[1].features == features[3:]


def test_ten_features_over_four_forks_are_balanced_rather_than_sliced() -> None:
    batches = plan_batches(_features(10), 4)

    assert [len(batch.features) for batch in batches] == [3, 3, 2, 2]

def test_single_fork_keeps_every_feature_in_one_batch() -> None:
    features = _features(7)

    batches = plan_batches(features, 1)

    assert batches == (Batch(batch_id=0, features=features),)


def test_more_forks_than_features_yields_one_feature_per_batch() -> None:
    batches = plan_batches(_features(3), 8)

    assert [len(batch.features) for batch in batches] == [1, 1, 1]


def test_batch_run_ids_are_sequential_and_assigned_before_dispatch() -> None:
    batches = plan_batches(_features(6), 3)

    assert [batch.run_id for batch in batches] == [
        "feature-batch-0",
        "feature-batch-1",
        "feature-batch-2",
    ]


@pytest.mark.parametrize("feature_count", [1, 2, 5, 6, 7, 10, 13, 31])
@pytest.mark.parametrize("forks", [1, 2, 3, 4, 7])
def test_batches_partition_features_exactly_once_with_balanced_sizes(
    feature_count: int, forks: int
) -> None:
    features = _features(feature_count)

    batches = plan_batches(features, forks)
    sizes = [len(batch.features) for batch in batches]

    assert tuple(feature for batch in batches for feature in batch.features) == features
    assert len(batches) <= forks
    assert len(batches) == math.ceil(feature_count / math.ceil(feature_count / forks))
    assert max(sizes) - min(sizes) <= 1
    assert all(sizes)


def test_invalid_fork_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        plan_batches(_features(2), 0)


def test_batch_artifacts_are_scoped_by_run_id(tmp_path: Path) -> None:
    artifacts = BatchArtifacts.for_run(tmp_path, "feature-batch-3", junit_report=True)

    assert artifacts.result_file == tmp_path / "feature-batch-3.json"
    assert artifacts.stdout_log == tmp_path / "feature-batch-3-out.log"
    assert artifacts.stderr_log == tmp_path / "feature-batch-3-err.log"
    assert artifacts.junit_report == tmp_path / "feature-batch-3.xml"
    assert BatchArtifacts.for_run(tmp_path, "x", junit_report=False).junit_report is None


def test_batch_artifacts_read_logs_joins_stderr_then_stdout(tmp_path: Path) -> None:
    artifacts = BatchArtifacts.for_run(tmp_path, "feature-batch-0", junit_report=False)
    assert artifacts.read_logs() == ""

    artifacts.stdout_log.write_text("console output\n", encoding="utf-8")
    artifacts.stderr_log.write_text("stack trace\n", encoding="utf-8")

    assert artifacts.read_logs() == "stack trace\nconsole output"
