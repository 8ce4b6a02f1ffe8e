"""Worker process launcher tests."""

from __future__ import annotations

import sys
from pathlib import Path

from feature_batch_runner.batch_planning import BatchArtifacts
from feature_batch_runner.configuration import EngineSettings
from feature_batch_runner.worker_invocation import SubprocessWorkerLauncher

_ECHO_SCRIPT = """
import os, sys
print("args:" + "|".join(sys.argv[1:]))
print("marker:" + os.environ.get("RUNNER_MARKER", ""))
print("cwd:" + os.getcwd())
print("to stderr", file=sys.stderr)
sys.exit(int(os.environ.get("RUNNER_EXIT", "0")))
"""


def _engine(tmp_path: Path, **environment: str) -> EngineSettings:
    script = tmp_path / "echo_engine.py"
    script.write_text(_ECHO_SCRIPT, encoding="utf-8")
    return EngineSettings(
        command=(sys.executable, str(script)),
        environment=environment,
        working_directory=tmp_path,
    )


def test_launcher_captures_console_output_to_batch_logs(tmp_path: Path) -> None:
    artifacts = BatchArtifacts.for_run(tmp_path / "results", "feature-batch-0", junit_report=False)
    launcher = SubprocessWorkerLauncher(_engine(tmp_path, RUNNER_MARKER="batch"))

    worker_exit = launcher.run("feature-batch-0", ["--strict", "a.feature"], artifacts)

    assert worker_exit.exit_code == 0
    assert worker_exit.launched is True
    stdout = artifacts.stdout_log.read_text(encoding="utf-8")
    assert "args:--strict|a.feature" in stdout
    assert "marker:batch" in stdout
    assert f"cwd:{tmp_path}" in stdout or f"cwd:{tmp_path.resolve()}" in stdout
    assert artifacts.stderr_log.read_text(encoding="utf-8").strip() == "to stderr"


def test_launcher_reports_non_zero_exit_without_raising(tmp_path: Path) -> None:
    artifacts = BatchArtifacts.for_run(tmp_path, "feature-batch-2", junit_report=False)
    launcher = SubprocessWorkerLauncher(_engine(tmp_path, RUNNER_EXIT="3"))

    worker_exit = launcher.run("feature-batch-2", [], artifacts)

    assert worker_exit.exit_code == 3
    assert worker_exit.run_id == "feature-batch-2"


def test_launch_failure_is_recorded_in_stderr_log(tmp_path: Path) -> None:
    artifacts = BatchArtifacts.for_run(tmp_path, "feature-batch-0", junit_report=False)
    launcher = SubprocessWorkerLauncher(
        EngineSettings(
            command=(str(tmp_path / "no-such-engine"),),
            environment={},
            working_directory=None,
        )
    )

    worker_exit = launcher.run("feature-batch-0", ["x.feature"], artifacts)

    assert worker_exit.exit_code is None
    assert worker_exit.launched is False
    assert "Failed to launch engine command" in artifacts.stderr_log.read_text(encoding="utf-8")
    assert not artifacts.result_file.exists()
