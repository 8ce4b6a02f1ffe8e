"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from feature_batch_runner.outcome_classification.batch_outcomes import BatchError
from feature_batch_runner.result_aggregation.suite_counters import SuiteCounters

PARSE_FAILURE_MESSAGE = "One or more feature files failed to parse. See error output above"
SCENARIO_FAILURE_MESSAGE = "One or more scenarios failed"


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one suite run; None keeps the configured value."""

    config_path: str
    tags: tuple[str, ...] | None = None
    max_parallel_forks: int | None = None
    dry_run: bool | None = None


class RunFailureKind(str, Enum):
    """Which fatal signal a failed run reports."""

    NONE = "none"
    PARSE_FAILURE = "parse-failure"
    SCENARIO_FAILURE = "scenario-failure"


@dataclass(frozen=True)
class SuiteVerdict:
    """Output contract for one completed suite run."""

    counters: SuiteCounters
    batch_count: int
    filtered_batches: int
    batch_errors: tuple[BatchError, ...]

    @property
    def failure_kind(self) -> RunFailureKind:
        if self.batch_errors or self.counters.had_definition_errors:
            return RunFailureKind.PARSE_FAILURE
        if self.counters.had_failures:
            return RunFailureKind.SCENARIO_FAILURE
        return RunFailureKind.NONE

    @property
    def succeeded(self) -> bool:
        return self.failure_kind is RunFailureKind.NONE

    @property
    def failure_message(self) -> str | None:
        return {
            RunFailureKind.NONE: None,
            RunFailureKind.PARSE_FAILURE: PARSE_FAILURE_MESSAGE,
            RunFailureKind.SCENARIO_FAILURE: SCENARIO_FAILURE_MESSAGE,
        }[self.failure_kind]
