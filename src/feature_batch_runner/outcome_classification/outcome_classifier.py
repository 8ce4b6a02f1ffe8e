"""Classification of a finished batch from its filesystem artifacts."""

from __future__ import annotations

import re
from pathlib import Path

from feature_batch_runner.batch_planning.batch_models import BatchArtifacts

from .batch_outcomes import BatchError, BatchErrorReason, BatchOutcome, EmptyFiltered, ValidResult

# Result files may embed attachments, so only files below this size are read to test
# for an empty array; "[ ]" with surrounding whitespace fits comfortably.
EMPTY_RESULT_FILE_MAX_SIZE_IN_BYTES = 16

_WHITESPACE = re.compile(rb"\s+")


def classify_batch_outcome(
    run_id: str, artifacts: BatchArtifacts, *, tags_configured: bool
) -> BatchOutcome:
    """Decide whether a batch is valid, legitimately empty, or an error."""
    if not artifacts.result_file.exists():
        return BatchError(
            run_id=run_id,
            reason=BatchErrorReason.MISSING_RESULT,
            logs=artifacts.read_logs(),
        )
    if is_result_file_empty(artifacts.result_file):
        if tags_configured:
            return EmptyFiltered(run_id=run_id)
        return BatchError(
            run_id=run_id,
            reason=BatchErrorReason.EMPTY_RESULT_WITHOUT_TAGS,
            logs=artifacts.read_logs(),
        )
    return ValidResult(run_id=run_id, result_file=artifacts.result_file)


def is_result_file_empty(result_file: Path) -> bool:
    """Return True for a small result file holding only an empty JSON array."""
    if result_file.stat().st_size >= EMPTY_RESULT_FILE_MAX_SIZE_IN_BYTES:
        return False
    return _WHITESPACE.sub(b"", result_file.read_bytes()) == b"[]"
