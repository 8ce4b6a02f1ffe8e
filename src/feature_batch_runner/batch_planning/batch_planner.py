"""Static partitioning of feature files into batches."""

from __future__ import annotations

import math
from collections.abc import Sequence

from feature_batch_runner.feature_discovery.feature_models import FeatureFile

from .batch_models import Batch


def plan_batches(features: Sequence[FeatureFile], max_parallel_forks: int) -> tuple[Batch, ...]:
    """Split features, in discovery order, into contiguous batches for parallel workers.

    The batch count is ``ceil(n / ceil(n / max_parallel_forks))``, so never more than
    ``max_parallel_forks``. Features are spread so batch sizes differ by at most one,
    larger batches first. No features yields no batches.

    This departs from plain consecutive slices of ``ceil(n / max_parallel_forks)``:
    10 features over 4 forks plan as 3, 3, 2, 2 rather than 3, 3, 3, 1.
    """
    if max_parallel_forks < 1:
        raise ValueError("max_parallel_forks must be at least 1.")
    if not features:
        return ()
    batch_size = math.ceil(len(features) / max_parallel_forks)
    batch_count = math.ceil(len(features) / batch_size)
    base_size, larger_batches = divmod(len(features), batch_count)

    batches: list[Batch] = []
    start = 0
    for batch_id in range(batch_count):
        size = base_size + 1 if batch_id < larger_batches else base_size
        batches.append(Batch(batch_id=batch_id, features=tuple(features[start : start + size])))
        start += size
    return tuple(batches)
