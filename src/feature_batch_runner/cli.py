"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from feature_batch_runner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from feature_batch_runner.run_execution import (
    RunExecutionError,
    RunFailureKind,
    RunRequest,
    execute_feature_suite_run,
    load_run_configuration,
    plan_suite_batches,
)

SCENARIO_FAILURE_EXIT_CODE = 1
PARSE_FAILURE_EXIT_CODE = 3

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


class _CliLogHandler(logging.StreamHandler):
    """Stderr handler installed by the CLI; replaced on every invocation."""

    def emit(self, record: logging.LogRecord) -> None:
        # sys.stderr can be rebound after setup.
        self.stream = sys.stderr
        super().emit(record)


class CliError(Exception):
    """Custom CLI error carrying the process exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="feature-batch-runner")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Run feature suites in parallel engine batches."""
    _configure_logging(logging.DEBUG if verbose else logging.INFO)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="plan")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--max-parallel-forks",
    type=click.IntRange(min=1),
    default=None,
    help="Override execution.max_parallel_forks",
)
def plan(config_path: str, max_parallel_forks: int | None) -> None:
    """Print how feature files would be split into batches without running them."""
    try:
        configuration = load_run_configuration(
            RunRequest(config_path=config_path, max_parallel_forks=max_parallel_forks)
        )
        batches = plan_suite_batches(configuration)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for batch in batches:
        click.echo(f"{batch.run_id} ({len(batch.features)} feature files)")
        for feature in batch.features:
            click.echo(f"  {feature.path}")


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--tags",
    "tags",
    multiple=True,
    help="Tag filter, repeatable; prefix with ~ to exclude. Replaces execution.tags.",
)
@click.option(
    "--max-parallel-forks",
    type=click.IntRange(min=1),
    default=None,
    help="Override execution.max_parallel_forks",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Ask the engine to check step definitions without executing them.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def run_suite(
    config_path: str,
    tags: tuple[str, ...],
    max_parallel_forks: int | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Execute every discovered feature file and report the suite verdict."""
    if verbose:
        _configure_logging(logging.DEBUG)
    try:
        verdict = execute_feature_suite_run(
            RunRequest(
                config_path=config_path,
                tags=tags or None,
                max_parallel_forks=max_parallel_forks,
                dry_run=True if dry_run else None,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    counters = verdict.counters
    click.echo(
        f"{counters.features} features in {verdict.batch_count} batches: "
        f"{counters.scenario_summary()}, {counters.step_summary()}"
    )
    if verdict.failure_kind is RunFailureKind.PARSE_FAILURE:
        raise CliError(verdict.failure_message or "", PARSE_FAILURE_EXIT_CODE)
    if verdict.failure_kind is RunFailureKind.SCENARIO_FAILURE:
        raise CliError(verdict.failure_message or "", SCENARIO_FAILURE_EXIT_CODE)


def _configure_logging(level: int) -> None:
    package_logger = logging.getLogger("feature_batch_runner")
    package_logger.setLevel(level)
    for existing in list(package_logger.handlers):
        if isinstance(existing, _CliLogHandler):
            package_logger.removeHandler(existing)
    handler = _CliLogHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
