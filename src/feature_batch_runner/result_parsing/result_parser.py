"""Engine JSON result parsing service."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .feature_results import FeatureResult

COUNTER_FIELDS = (
    "passedScenarios",
    "failedScenarios",
    "passedSteps",
    "failedSteps",
    "skippedSteps",
    "pendingSteps",
    "undefinedSteps",
)

_FAILING_STATUSES = frozenset({"failed", "pending", "undefined"})
_STATUS_ALIASES = {"missing": "undefined", "ambiguous": "failed"}


class ResultParseError(Exception):
    """Raised when a result file is not a structurally valid feature report array."""


def parse_result_file(result_file: Path) -> tuple[FeatureResult, ...]:
    """Parse a batch result file into one FeatureResult per feature entry."""
    try:
        document = json.loads(result_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultParseError(f"Failed to read result file {result_file}: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        raise ResultParseError(f"Result file {result_file} is not valid JSON: {exc}") from exc
    return parse_feature_reports(document)


def parse_feature_reports(document: Any) -> tuple[FeatureResult, ...]:
    """Transform a decoded feature report array into FeatureResults."""
    if not isinstance(document, list):
        raise ResultParseError("Result document root must be an array of feature reports.")
    results = []
    for index, entry in enumerate(document):
        if not isinstance(entry, Mapping):
            raise ResultParseError(f"Feature report #{index} must be an object.")
        results.append(create_feature_result(entry, index))
    return tuple(results)


def create_feature_result(entry: Mapping[str, Any], index: int = 0) -> FeatureResult:
    """Build counters from precomputed tallies when present, else from scenario elements."""
    label = _feature_label(entry, index)
    if any(field in entry for field in COUNTER_FIELDS):
        missing = [field for field in COUNTER_FIELDS if field not in entry]
        if missing:
            raise ResultParseError(f"{label}: missing counters {', '.join(missing)}.")
        tallies = {field: _require_count(entry[field], field, label) for field in COUNTER_FIELDS}
    elif "elements" in entry:
        tallies = _tally_elements(entry["elements"], label)
    else:
        raise ResultParseError(f"{label}: report has neither counters nor 'elements'.")
    return FeatureResult(
        name=label,
        total_scenarios=tallies["passedScenarios"] + tallies["failedScenarios"],
        failed_scenarios=tallies["failedScenarios"],
        total_steps=tallies["passedSteps"] + tallies["failedSteps"],
        failed_steps=tallies["failedSteps"],
        skipped_steps=tallies["skippedSteps"],
        pending_steps=tallies["pendingSteps"],
        undefined_steps=tallies["undefinedSteps"],
    )


def _tally_elements(elements: Any, label: str) -> dict[str, int]:
    if not isinstance(elements, list):
        raise ResultParseError(f"{label}: 'elements' must be an array.")
    tallies = dict.fromkeys(COUNTER_FIELDS, 0)
    for element in elements:
        if not isinstance(element, Mapping):
            raise ResultParseError(f"{label}: scenario elements must be objects.")
        if element.get("type", "scenario") != "scenario":
            continue
        step_statuses = [_status(step, label) for step in _sequence(element, "steps", label)]
        hook_statuses = [
            _status(hook, label)
            for key in ("before", "after")
            for hook in _sequence(element, key, label)
        ]
        counts = Counter(step_statuses)
        for status in ("passed", "failed", "skipped", "pending", "undefined"):
            tallies[f"{status}Steps"] += counts[status]
        if _FAILING_STATUSES.intersection(step_statuses + hook_statuses):
            tallies["failedScenarios"] += 1
        else:
            tallies["passedScenarios"] += 1
    return tallies


def _sequence(element: Mapping[str, Any], key: str, label: str) -> Sequence[Any]:
    value = element.get(key, [])
    if not isinstance(value, list):
        raise ResultParseError(f"{label}: '{key}' must be an array.")
    return value


def _status(step: Any, label: str) -> str:
    if not isinstance(step, Mapping):
        raise ResultParseError(f"{label}: steps and hooks must be objects.")
    result = step.get("result")
    if not isinstance(result, Mapping) or not isinstance(result.get("status"), str):
        raise ResultParseError(f"{label}: every step needs a result status.")
    status = result["status"].lower()
    return _STATUS_ALIASES.get(status, status)


def _require_count(value: Any, field: str, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ResultParseError(f"{label}: {field} must be a non-negative integer.")
    return value


def _feature_label(entry: Mapping[str, Any], index: int) -> str:
    for key in ("name", "uri"):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return f"feature #{index}"
