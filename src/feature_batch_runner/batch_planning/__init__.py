"""Batch planning exports."""

from .batch_models import RUN_ID_PREFIX, Batch, BatchArtifacts
from .batch_planner import plan_batches

__all__ = ["RUN_ID_PREFIX", "Batch", "BatchArtifacts", "plan_batches"]
