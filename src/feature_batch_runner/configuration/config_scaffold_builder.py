"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "feature-batch-runner.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for feature-batch-runner.
# Replace every <REQUIRED> placeholder before running plan or run.
# Relative paths are resolved against the directory of this file.

features:
  # Directories searched for feature files.
  roots:
    - "<REQUIRED>"
  # pattern: "**/*.feature"

# Step-definition roots forwarded to the engine as --glue arguments.
glue:
  - "<REQUIRED>"

engine:
  # Base command that launches the test-execution engine; batch arguments are appended.
  command:
    - "java"
    - "-cp"
    - "<REQUIRED>"
    - "cucumber.api.cli.Main"
  # environment:
  #   KEY: "<OPTIONAL>"
  # working_directory: "<OPTIONAL>"

execution:
  # Number of batches run in parallel; features are split into at most this many batches.
  max_parallel_forks: 1
  # Tags prefixed with ~ exclude scenarios, others are required.
  tags: []
  dry_run: false
  strict: false
  monochrome: false
  snippets: "camelcase"
  junit_report: false
  plugins: []

output:
  results_dir: "build/cucumber-results"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Run configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
