"""Feature discovery tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from feature_batch_runner.feature_discovery import (
    FeatureDiscoveryError,
    FeatureFile,
    discover_feature_files,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("Feature: placeholder\n", encoding="utf-8")
    return path


def test_discovers_features_sorted_within_each_root_in_root_order(tmp_path: Path) -> None:
    second_root = tmp_path / "b"
    first_root = tmp_path / "a"
    _touch(second_root / "z.feature")
    _touch(first_root / "nested" / "y.feature")
    _touch(first_root / "x.feature")
    _touch(first_root / "notes.txt")

    features = discover_feature_files((first_root, second_root), "**/*.feature")

    assert [feature.path for feature in features] == [
        (first_root / "nested" / "y.feature").resolve(),
        (first_root / "x.feature").resolve(),
        (second_root / "z.feature").resolve(),
    ]


def test_overlapping_roots_do_not_duplicate_features(tmp_path: Path) -> None:
    feature = _touch(tmp_path / "suite" / "login.feature")

    features = discover_feature_files((tmp_path, tmp_path / "suite"), "**/*.feature")

    assert features == (FeatureFile(path=feature.resolve()),)


def test_empty_root_yields_no_features(tmp_path: Path) -> None:
    assert discover_feature_files((tmp_path,), "**/*.feature") == ()


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FeatureDiscoveryError, match="Feature root not found"):
        discover_feature_files((tmp_path / "missing",), "**/*.feature")
