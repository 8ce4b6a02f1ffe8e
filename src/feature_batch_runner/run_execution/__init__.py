"""Run execution domain exports."""

from .batch_orchestrator import BatchOrchestrator
from .run_contracts import (
    PARSE_FAILURE_MESSAGE,
    SCENARIO_FAILURE_MESSAGE,
    RunFailureKind,
    RunRequest,
    SuiteVerdict,
)
from .suite_run_use_case import (
    RunExecutionError,
    execute_feature_suite_run,
    load_run_configuration,
    plan_suite_batches,
    run_configured_suite,
)

__all__ = [
    "BatchOrchestrator",
    "PARSE_FAILURE_MESSAGE",
    "SCENARIO_FAILURE_MESSAGE",
    "RunFailureKind",
    "RunRequest",
    "SuiteVerdict",
    "RunExecutionError",
    "execute_feature_suite_run",
    "load_run_configuration",
    "plan_suite_batches",
    "run_configured_suite",
]
