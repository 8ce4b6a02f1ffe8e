"""Blocking launcher for external engine worker processes."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from feature_batch_runner.batch_planning.batch_models import BatchArtifacts
from feature_batch_runner.configuration.runtime_settings import EngineSettings

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkerExit:
    """Exit state of one worker process; ``exit_code`` is None when it never started."""

    run_id: str
    exit_code: int | None

    @property
    def launched(self) -> bool:
        return self.exit_code is not None


class WorkerLauncher(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for running one batch's engine invocation to completion."""

    def run(self, run_id: str, args: Sequence[str], artifacts: BatchArtifacts) -> WorkerExit: ...


class SubprocessWorkerLauncher:  # pylint: disable=too-few-public-methods
    """Runs the configured engine command with console output captured to batch log files."""

    def __init__(self, engine: EngineSettings) -> None:
        self._engine = engine

    def run(self, run_id: str, args: Sequence[str], artifacts: BatchArtifacts) -> WorkerExit:
        command = [*self._engine.command, *args]
        artifacts.stdout_log.parent.mkdir(parents=True, exist_ok=True)
        _LOGGER.debug("Launching %s: %s", run_id, shlex.join(command))
        with (
            artifacts.stdout_log.open("w", encoding="utf-8") as stdout_log,
            artifacts.stderr_log.open("w", encoding="utf-8") as stderr_log,
        ):
            try:
                completed = subprocess.run(
                    command,
                    cwd=self._engine.working_directory,
                    env=self._environment(),
                    stdin=subprocess.DEVNULL,
                    stdout=stdout_log,
                    stderr=stderr_log,
                    check=False,
                )
            except OSError as exc:
                stderr_log.write(f"Failed to launch engine command {shlex.join(command)}: {exc}\n")
                _LOGGER.debug("%s could not be launched: %s", run_id, exc)
                return WorkerExit(run_id=run_id, exit_code=None)
        _LOGGER.debug("%s exited with code %d", run_id, completed.returncode)
        return WorkerExit(run_id=run_id, exit_code=completed.returncode)

    def _environment(self) -> dict[str, str] | None:
        if not self._engine.environment:
            return None
        return {**os.environ, **self._engine.environment}
