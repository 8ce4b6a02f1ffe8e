"""Outcome classification exports."""

from .batch_outcomes import BatchError, BatchErrorReason, BatchOutcome, EmptyFiltered, ValidResult
from .outcome_classifier import (
    EMPTY_RESULT_FILE_MAX_SIZE_IN_BYTES,
    classify_batch_outcome,
    is_result_file_empty,
)

__all__ = [
    "BatchError",
    "BatchErrorReason",
    "BatchOutcome",
    "EmptyFiltered",
    "ValidResult",
    "EMPTY_RESULT_FILE_MAX_SIZE_IN_BYTES",
    "classify_batch_outcome",
    "is_result_file_empty",
]
