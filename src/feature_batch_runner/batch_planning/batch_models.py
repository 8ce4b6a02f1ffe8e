"""Batch planning domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from feature_batch_runner.feature_discovery.feature_models import FeatureFile

RUN_ID_PREFIX = "feature-batch"


@dataclass(frozen=True)
class Batch:
    """Ordered, non-empty group of feature files executed by one worker process."""

    batch_id: int
    features: tuple[FeatureFile, ...]

    @property
    def run_id(self) -> str:
        return f"{RUN_ID_PREFIX}-{self.batch_id}"


@dataclass(frozen=True)
class BatchArtifacts:
    """Batch-scoped file locations reserved before the worker runs."""

    result_file: Path
    stdout_log: Path
    stderr_log: Path
    junit_report: Path | None

    @classmethod
    def for_run(cls, results_dir: Path, run_id: str, *, junit_report: bool) -> BatchArtifacts:
        return cls(
            result_file=results_dir / f"{run_id}.json",
            stdout_log=results_dir / f"{run_id}-out.log",
            stderr_log=results_dir / f"{run_id}-err.log",
            junit_report=results_dir / f"{run_id}.xml" if junit_report else None,
        )

    def read_logs(self) -> str:
        """Return captured stderr followed by stdout, skipping logs the worker never wrote."""
        chunks = []
        for log_file in (self.stderr_log, self.stdout_log):
            if log_file.exists():
                text = log_file.read_text(encoding="utf-8", errors="replace").strip()
                if text:
                    chunks.append(text)
        return "\n".join(chunks)
