"""Feature discovery domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FeatureFile:
    """Reference to one feature file; identity is the resolved path."""

    path: Path

    @property
    def absolute_path(self) -> str:
        return str(self.path.resolve())
