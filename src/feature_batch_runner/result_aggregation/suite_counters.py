"""Suite-wide counter entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SuiteCounters:  # pylint: disable=too-many-instance-attributes
    """Snapshot of running totals across every feature aggregated so far."""

    expected_features: int = 0
    features: int = 0
    failed_features: int = 0
    scenarios: int = 0
    failed_scenarios: int = 0
    steps: int = 0
    failed_steps: int = 0
    skipped_steps: int = 0
    pending_steps: int = 0
    undefined_steps: int = 0
    had_failures: bool = False
    had_definition_errors: bool = False

    def scenario_summary(self) -> str:
        return f"{self.scenarios} scenarios ({self.failed_scenarios} failed)"

    def step_summary(self) -> str:
        return (
            f"{self.steps} steps ({self.failed_steps} failed, {self.skipped_steps} skipped, "
            f"{self.pending_steps} pending, {self.undefined_steps} undefined)"
        )
