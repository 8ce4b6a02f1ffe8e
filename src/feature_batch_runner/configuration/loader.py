"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    EngineSettings,
    ExecutionSettings,
    FeatureSettings,
    OutputSettings,
)

DEFAULT_FEATURE_PATTERN = "**/*.feature"
DEFAULT_SNIPPETS = "camelcase"
DEFAULT_RESULTS_DIR = "build/cucumber-results"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        features=_parse_features_section(parsed.get("features"), base_path),
        glue=_normalize_string_sequence(parsed.get("glue"), "glue"),
        engine=_parse_engine_section(parsed.get("engine"), base_path),
        execution=_parse_execution_section(parsed.get("execution")),
        output=_parse_output_section(parsed.get("output"), base_path),
    )


def _parse_features_section(value: Any, base_path: Path) -> FeatureSettings:
    section = _require_mapping(value, "features")
    roots = _normalize_string_sequence(section.get("roots"), "features.roots")
    if not roots:
        raise ConfigurationError("features.roots must contain at least one directory.")
    pattern = _require_non_empty_string(
        section.get("pattern", DEFAULT_FEATURE_PATTERN), "features.pattern"
    )
    return FeatureSettings(
        roots=tuple(_resolve_path(base_path, root) for root in roots),
        pattern=pattern,
    )


def _parse_engine_section(value: Any, base_path: Path) -> EngineSettings:
    section = _require_mapping(value, "engine")
    command = _normalize_string_sequence(section.get("command"), "engine.command")
    if not command:
        raise ConfigurationError("engine.command must contain at least one entry.")
    environment = section.get("environment") or {}
    if not isinstance(environment, Mapping):
        raise ConfigurationError("engine.environment must be a mapping.")
    normalized_environment: dict[str, str] = {}
    for key, raw_value in environment.items():
        if not isinstance(key, str) or isinstance(raw_value, (Mapping, list)):
            raise ConfigurationError("engine.environment entries must be scalar values.")
        normalized_environment[key] = "" if raw_value is None else str(raw_value)
    working_directory = _optional_string(
        section.get("working_directory"), "engine.working_directory"
    )
    return EngineSettings(
        command=command,
        environment=normalized_environment,
        working_directory=(
            _resolve_path(base_path, working_directory) if working_directory else None
        ),
    )


def _parse_execution_section(value: Any) -> ExecutionSettings:
    section = _optional_mapping(value, "execution")
    return ExecutionSettings(
        max_parallel_forks=_require_positive_int(
            section.get("max_parallel_forks", 1), "execution.max_parallel_forks"
        ),
        tags=_normalize_string_sequence(section.get("tags"), "execution.tags"),
        dry_run=_require_bool(section.get("dry_run", False), "execution.dry_run"),
        strict=_require_bool(section.get("strict", False), "execution.strict"),
        monochrome=_require_bool(section.get("monochrome", False), "execution.monochrome"),
        snippets=_require_non_empty_string(
            section.get("snippets", DEFAULT_SNIPPETS), "execution.snippets"
        ),
        junit_report=_require_bool(section.get("junit_report", False), "execution.junit_report"),
        plugins=_normalize_string_sequence(section.get("plugins"), "execution.plugins"),
    )


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    results_dir = _require_non_empty_string(
        section.get("results_dir", DEFAULT_RESULTS_DIR), "output.results_dir"
    )
    return OutputSettings(results_dir=_resolve_path(base_path, results_dir))


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
