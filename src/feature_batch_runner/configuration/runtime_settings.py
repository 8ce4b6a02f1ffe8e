"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class FeatureSettings:
    """Where feature files are discovered."""

    roots: tuple[Path, ...]
    pattern: str


@dataclass(frozen=True)
class EngineSettings:
    """External test-execution engine launch configuration."""

    command: tuple[str, ...]
    environment: Mapping[str, str]
    working_directory: Path | None


@dataclass(frozen=True)
class ExecutionSettings:  # pylint: disable=too-many-instance-attributes
    """Options forwarded to every worker invocation."""

    max_parallel_forks: int
    tags: tuple[str, ...]
    dry_run: bool
    strict: bool
    monochrome: bool
    snippets: str
    junit_report: bool
    plugins: tuple[str, ...]


@dataclass(frozen=True)
class OutputSettings:
    """Batch artifact locations."""

    results_dir: Path


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    features: FeatureSettings
    glue: tuple[str, ...]
    engine: EngineSettings
    execution: ExecutionSettings
    output: OutputSettings

    def with_overrides(
        self,
        *,
        tags: tuple[str, ...] | None = None,
        max_parallel_forks: int | None = None,
        dry_run: bool | None = None,
    ) -> Configuration:
        """Return a copy with command-line overrides applied to execution settings."""
        execution = self.execution
        if tags is not None:
            execution = replace(execution, tags=tags)
        if max_parallel_forks is not None:
            execution = replace(execution, max_parallel_forks=max_parallel_forks)
        if dry_run is not None:
            execution = replace(execution, dry_run=dry_run)
        return replace(self, execution=execution)
