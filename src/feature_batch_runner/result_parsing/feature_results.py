"""Per-feature result entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureResult:  # pylint: disable=too-many-instance-attributes
    """Scenario and step counters for one executed feature."""

    name: str
    total_scenarios: int
    failed_scenarios: int
    total_steps: int
    failed_steps: int
    skipped_steps: int
    pending_steps: int
    undefined_steps: int

    @property
    def had_failures(self) -> bool:
        return self.failed_scenarios > 0

    @property
    def has_undefined_steps(self) -> bool:
        return self.undefined_steps > 0
