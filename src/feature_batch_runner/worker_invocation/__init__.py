"""Worker invocation exports."""

from .command_arguments import build_tag_arguments, build_worker_arguments
from .process_launcher import SubprocessWorkerLauncher, WorkerExit, WorkerLauncher

__all__ = [
    "build_tag_arguments",
    "build_worker_arguments",
    "SubprocessWorkerLauncher",
    "WorkerExit",
    "WorkerLauncher",
]
