"""Thread-safe aggregation of feature results into suite counters."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from pathlib import Path

from feature_batch_runner.result_parsing.feature_results import FeatureResult

from .suite_counters import SuiteCounters

_LOGGER = logging.getLogger(__name__)


class SuiteAlreadyFinishedError(RuntimeError):
    """Raised when results arrive after the suite was finalized."""


class ResultAggregator:
    """Owns the suite counters; every mutation happens under one lock.

    ``after_feature`` is called from worker-completion threads in any order, so
    each update is a commutative increment and ``had_failures`` only ever turns on.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters = SuiteCounters()
        self._finished = False

    def before_suite(self, expected_feature_count: int) -> None:
        """Reset counters and record how many features the run expects to execute."""
        with self._lock:
            self._counters = SuiteCounters(expected_features=expected_feature_count)
            self._finished = False
        _LOGGER.info("Running %d feature files", expected_feature_count)

    def after_feature(self, result: FeatureResult, *, console_log: Path | None = None) -> None:
        """Add one feature's counters to the suite totals."""
        with self._lock:
            if self._finished:
                raise SuiteAlreadyFinishedError(
                    f"Result for '{result.name}' arrived after the suite finished."
                )
            current = self._counters
            self._counters = replace(
                current,
                features=current.features + 1,
                failed_features=current.failed_features + int(result.had_failures),
                scenarios=current.scenarios + result.total_scenarios,
                failed_scenarios=current.failed_scenarios + result.failed_scenarios,
                steps=current.steps + result.total_steps,
                failed_steps=current.failed_steps + result.failed_steps,
                skipped_steps=current.skipped_steps + result.skipped_steps,
                pending_steps=current.pending_steps + result.pending_steps,
                undefined_steps=current.undefined_steps + result.undefined_steps,
                had_failures=current.had_failures or result.had_failures,
                had_definition_errors=(
                    current.had_definition_errors or result.has_undefined_steps
                ),
            )
            progress = (self._counters.features, self._counters.expected_features)

        _LOGGER.debug("Aggregated feature '%s' (%d/%d)", result.name, *progress)
        if result.had_failures:
            _LOGGER.error(
                "Feature '%s' had %d failed scenarios; console log: %s",
                result.name,
                result.failed_scenarios,
                console_log or "unavailable",
            )
        if result.has_undefined_steps:
            _LOGGER.error(
                "Feature '%s' references %d undefined steps; console log: %s",
                result.name,
                result.undefined_steps,
                console_log or "unavailable",
            )

    def after_suite(self) -> SuiteCounters:
        """Freeze the counters and log a summary; later results are rejected."""
        with self._lock:
            self._finished = True
            counters = self._counters
        _LOGGER.info(counters.scenario_summary())
        _LOGGER.info(counters.step_summary())
        return counters

    @property
    def counters(self) -> SuiteCounters:
        with self._lock:
            return self._counters

    def had_failures(self) -> bool:
        return self.counters.had_failures

    def had_definition_errors(self) -> bool:
        return self.counters.had_definition_errors
