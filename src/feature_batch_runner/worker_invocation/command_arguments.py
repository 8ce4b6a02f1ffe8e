"""Engine argument-vector construction for one batch."""

from __future__ import annotations

from collections.abc import Sequence

from feature_batch_runner.batch_planning.batch_models import Batch, BatchArtifacts
from feature_batch_runner.configuration.runtime_settings import ExecutionSettings

PLUGIN = "--plugin"
TAGS = "--tags"
EXCLUDE_MARKER = "~"


def build_worker_arguments(
    batch: Batch,
    artifacts: BatchArtifacts,
    *,
    glue: Sequence[str],
    execution: ExecutionSettings,
) -> list[str]:
    """Return engine arguments for the batch; the base engine command is not included."""
    args: list[str] = []
    for root in glue:
        args.extend(("--glue", root))
    args.extend(_plugin_arguments(artifacts, execution))
    if execution.dry_run:
        args.append("--dry-run")
    if execution.monochrome:
        args.append("--monochrome")
    if execution.strict:
        args.append("--strict")
    args.extend(build_tag_arguments(execution.tags))
    args.extend(("--snippets", execution.snippets))
    args.extend(feature.absolute_path for feature in batch.features)
    return args


def build_tag_arguments(tags: Sequence[str]) -> list[str]:
    """Split tags into one comma-joined include clause and one clause per exclusion."""
    include = [tag for tag in tags if not tag.startswith(EXCLUDE_MARKER)]
    exclude = [tag for tag in tags if tag.startswith(EXCLUDE_MARKER)]
    args: list[str] = []
    if include:
        args.extend((TAGS, ",".join(include)))
    for tag in exclude:
        args.extend((TAGS, tag))
    return args


def _plugin_arguments(artifacts: BatchArtifacts, execution: ExecutionSettings) -> list[str]:
    args = [PLUGIN, "pretty", PLUGIN, f"json:{artifacts.result_file.resolve()}"]
    if artifacts.junit_report is not None:
        args.extend((PLUGIN, f"junit:{artifacts.junit_report.resolve()}"))
    for plugin in execution.plugins:
        args.extend((PLUGIN, plugin))
    return args
