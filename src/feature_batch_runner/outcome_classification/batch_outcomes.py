"""Batch outcome domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BatchErrorReason(str, Enum):
    """Why a batch could not contribute feature results."""

    MISSING_RESULT = "missing result"
    EMPTY_RESULT_WITHOUT_TAGS = "empty result with no tag filter - feature failed to execute"
    UNPARSEABLE_RESULT = "unparseable result"
    WORKER_FAILURE = "worker failed unexpectedly"


@dataclass(frozen=True)
class ValidResult:
    """Batch produced a non-empty result file that should be parsed."""

    run_id: str
    result_file: Path


@dataclass(frozen=True)
class EmptyFiltered:
    """Batch produced an empty result because the tag filter excluded every scenario."""

    run_id: str


@dataclass(frozen=True)
class BatchError:
    """Batch failed to produce a usable result; always fails the run."""

    run_id: str
    reason: BatchErrorReason
    logs: str
    detail: str | None = None

    @property
    def message(self) -> str:
        text = f"{self.run_id}: {self.reason.value}"
        return f"{text} ({self.detail})" if self.detail else text


BatchOutcome = ValidResult | EmptyFiltered | BatchError
