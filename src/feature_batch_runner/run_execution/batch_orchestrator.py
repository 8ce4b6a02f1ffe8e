"""Bounded-concurrency execution of batches against the external engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

from feature_batch_runner.batch_planning.batch_models import Batch, BatchArtifacts
from feature_batch_runner.configuration.runtime_settings import Configuration
from feature_batch_runner.outcome_classification.batch_outcomes import (
    BatchError,
    BatchErrorReason,
    BatchOutcome,
    EmptyFiltered,
    ValidResult,
)
from feature_batch_runner.outcome_classification.outcome_classifier import classify_batch_outcome
from feature_batch_runner.result_aggregation.result_aggregator import ResultAggregator
from feature_batch_runner.result_parsing.result_parser import ResultParseError, parse_result_file
from feature_batch_runner.worker_invocation.command_arguments import build_worker_arguments
from feature_batch_runner.worker_invocation.process_launcher import WorkerLauncher

_LOGGER = logging.getLogger(__name__)


class BatchOrchestrator:  # pylint: disable=too-few-public-methods
    """Runs every batch on a fixed pool of worker slots and feeds results to the aggregator."""

    def __init__(
        self,
        configuration: Configuration,
        launcher: WorkerLauncher,
        aggregator: ResultAggregator,
    ) -> None:
        self._configuration = configuration
        self._launcher = launcher
        self._aggregator = aggregator

    def run_all(self, batches: Sequence[Batch]) -> tuple[BatchOutcome, ...]:
        """Run batches to completion and return their outcomes in batch order.

        A failing batch never cancels its siblings; the call returns only after
        every batch has been classified and aggregated.
        """
        if not batches:
            return ()
        results_dir = self._configuration.output.results_dir
        results_dir.mkdir(parents=True, exist_ok=True)
        max_workers = max(1, self._configuration.execution.max_parallel_forks)
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="batch") as executor:
            futures = [
                executor.submit(self._run_batch_isolated, batch, results_dir) for batch in batches
            ]
            wait(futures)
        return tuple(future.result() for future in futures)

    def _run_batch_isolated(self, batch: Batch, results_dir: Path) -> BatchOutcome:
        try:
            return self._run_batch(batch, results_dir)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _LOGGER.exception("%s failed unexpectedly", batch.run_id)
            artifacts = BatchArtifacts.for_run(
                results_dir, batch.run_id, junit_report=self._configuration.execution.junit_report
            )
            return BatchError(
                run_id=batch.run_id,
                reason=BatchErrorReason.WORKER_FAILURE,
                logs=artifacts.read_logs(),
                detail=f"{type(exc).__name__}: {exc}",
            )

    def _run_batch(self, batch: Batch, results_dir: Path) -> BatchOutcome:
        execution = self._configuration.execution
        artifacts = BatchArtifacts.for_run(
            results_dir, batch.run_id, junit_report=execution.junit_report
        )
        _remove_stale_result(artifacts)
        args = build_worker_arguments(
            batch, artifacts, glue=self._configuration.glue, execution=execution
        )
        _LOGGER.info("Starting %s with %d feature files", batch.run_id, len(batch.features))
        worker_exit = self._launcher.run(batch.run_id, args, artifacts)

        outcome = classify_batch_outcome(
            batch.run_id, artifacts, tags_configured=bool(execution.tags)
        )
        if isinstance(outcome, ValidResult):
            outcome = self._aggregate(outcome, artifacts)
        if isinstance(outcome, EmptyFiltered):
            _LOGGER.info("%s: tag filter excluded every scenario", batch.run_id)
        elif isinstance(outcome, BatchError):
            _LOGGER.error("%s\n%s", outcome.message, outcome.logs)
        elif worker_exit.exit_code:
            _LOGGER.warning(
                "%s exited with code %d; using its result file", batch.run_id, worker_exit.exit_code
            )
        return outcome

    def _aggregate(self, outcome: ValidResult, artifacts: BatchArtifacts) -> BatchOutcome:
        try:
            results = parse_result_file(outcome.result_file)
        except ResultParseError as exc:
            return BatchError(
                run_id=outcome.run_id,
                reason=BatchErrorReason.UNPARSEABLE_RESULT,
                logs=artifacts.read_logs(),
                detail=str(exc),
            )
        for result in results:
            self._aggregator.after_feature(result, console_log=artifacts.stdout_log)
        if any(result.had_failures or result.has_undefined_steps for result in results):
            _LOGGER.error(
                "%s console output:\n%s", outcome.run_id, _read_text(artifacts.stdout_log)
            )
        return outcome


def _remove_stale_result(artifacts: BatchArtifacts) -> None:
    # A result left by an earlier run must not be classified as this run's output.
    artifacts.result_file.unlink(missing_ok=True)


def _read_text(path: Path) -> str:
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8", errors="replace")
