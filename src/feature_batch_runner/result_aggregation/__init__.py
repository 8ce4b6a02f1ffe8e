"""Result aggregation exports."""

from .result_aggregator import ResultAggregator, SuiteAlreadyFinishedError
from .suite_counters import SuiteCounters

__all__ = ["ResultAggregator", "SuiteAlreadyFinishedError", "SuiteCounters"]
