"""Suite run use-case service."""

from __future__ import annotations

import logging

from feature_batch_runner.batch_planning.batch_models import Batch
from feature_batch_runner.batch_planning.batch_planner import plan_batches
from feature_batch_runner.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from feature_batch_runner.feature_discovery import FeatureDiscoveryError, discover_feature_files
from feature_batch_runner.outcome_classification.batch_outcomes import BatchError, EmptyFiltered
from feature_batch_runner.result_aggregation.result_aggregator import ResultAggregator
from feature_batch_runner.worker_invocation.process_launcher import (
    SubprocessWorkerLauncher,
    WorkerLauncher,
)

from .batch_orchestrator import BatchOrchestrator
from .run_contracts import RunRequest, SuiteVerdict

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a suite run cannot be started."""


def load_run_configuration(request: RunRequest) -> Configuration:
    """Load the configuration file and apply the request's overrides."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc
    if request.max_parallel_forks is not None and request.max_parallel_forks < 1:
        raise RunExecutionError("max_parallel_forks must be greater than zero.")
    return configuration.with_overrides(
        tags=request.tags,
        max_parallel_forks=request.max_parallel_forks,
        dry_run=request.dry_run,
    )


def plan_suite_batches(configuration: Configuration) -> tuple[Batch, ...]:
    """Discover feature files and partition them for the configured parallelism."""
    try:
        features = discover_feature_files(
            configuration.features.roots, configuration.features.pattern
        )
    except FeatureDiscoveryError as exc:
        raise RunExecutionError(str(exc)) from exc
    return plan_batches(features, configuration.execution.max_parallel_forks)


def execute_feature_suite_run(
    request: RunRequest,
    *,
    launcher: WorkerLauncher | None = None,
    aggregator: ResultAggregator | None = None,
) -> SuiteVerdict:
    """Execute one full suite run and return its verdict."""
    configuration = load_run_configuration(request)
    return run_configured_suite(configuration, launcher=launcher, aggregator=aggregator)


def run_configured_suite(
    configuration: Configuration,
    *,
    launcher: WorkerLauncher | None = None,
    aggregator: ResultAggregator | None = None,
) -> SuiteVerdict:
    """Plan, execute, classify and aggregate every batch for an already loaded configuration."""
    resolved_launcher = launcher or SubprocessWorkerLauncher(configuration.engine)
    resolved_aggregator = aggregator or ResultAggregator()

    batches = plan_suite_batches(configuration)
    feature_count = sum(len(batch.features) for batch in batches)
    resolved_aggregator.before_suite(feature_count)
    _LOGGER.info(
        "Split %d feature files into %d batches (max parallel forks: %d)",
        feature_count,
        len(batches),
        configuration.execution.max_parallel_forks,
    )

    outcomes = BatchOrchestrator(configuration, resolved_launcher, resolved_aggregator).run_all(
        batches
    )
    counters = resolved_aggregator.after_suite()
    return SuiteVerdict(
        counters=counters,
        batch_count=len(batches),
        filtered_batches=sum(1 for outcome in outcomes if isinstance(outcome, EmptyFiltered)),
        batch_errors=tuple(outcome for outcome in outcomes if isinstance(outcome, BatchError)),
    )
