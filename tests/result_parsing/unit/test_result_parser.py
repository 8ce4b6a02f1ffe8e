"""Result parser tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from feature_batch_runner.result_parsing import (
    FeatureResult,
    ResultParseError,
    create_feature_result,
    parse_feature_reports,
    parse_result_file,
)


def _counter_report(name: str, **counts: int) -> dict[str, object]:
    report: dict[str, object] = {
        "name": name,
        "passedScenarios": 0,
        "failedScenarios": 0,
        "passedSteps": 0,
        "failedSteps": 0,
        "skippedSteps": 0,
        "pendingSteps": 0,
        "undefinedSteps": 0,
    }
    report.update(counts)
    return report


def _step(status: str) -> dict[str, object]:
    return {"keyword": "Given ", "name": "a step", "result": {"status": status}}


def test_counter_reports_are_summed_into_totals() -> None:
    result = create_feature_result(
        _counter_report(
            "Checkout",
            passedScenarios=3,
            failedScenarios=1,
            passedSteps=10,
            failedSteps=2,
            skippedSteps=4,
            pendingSteps=1,
            undefinedSteps=5,
        )
    )

    assert result == FeatureResult(
        name="Checkout",
        total_scenarios=4,
        failed_scenarios=1,
        total_steps=12,
        failed_steps=2,
        skipped_steps=4,
        pending_steps=1,
        undefined_steps=5,
    )
    assert result.had_failures is True
    assert result.has_undefined_steps is True


def test_engine_json_elements_are_tallied_per_scenario() -> None:
    report = {
        "uri": "features/login.feature",
        "elements": [
            {"type": "background", "steps": [_step("passed")]},
            {"type": "scenario", "steps": [_step("passed"), _step("passed")]},
            {
                "type": "scenario",
                "steps": [_step("passed"), _step("failed"), _step("skipped")],
            },
            {"type": "scenario", "steps": [_step("undefined"), _step("missing")]},
            {"type": "scenario", "steps": [_step("pending")]},
            {
                "type": "scenario",
                "before": [_step("failed")],
                "steps": [_step("skipped")],
            },
            {"type": "scenario", "steps": [_step("skipped")]},
        ],
    }

    result = create_feature_result(report)

    assert result.name == "features/login.feature"
    assert result.total_scenarios == 6
    assert result.failed_scenarios == 4
    assert result.total_steps == 4
    assert result.failed_steps == 1
    assert result.skipped_steps == 3
    assert result.pending_steps == 1
    assert result.undefined_steps == 2


def test_feature_with_empty_elements_has_zero_counters() -> None:
    result = create_feature_result({"name": "Empty", "elements": []})

    assert result.total_scenarios == 0
    assert result.had_failures is False


def test_empty_array_yields_no_results() -> None:
    assert parse_feature_reports([]) == ()


def test_parse_result_file_is_idempotent(tmp_path: Path) -> None:
    result_file = tmp_path / "feature-batch-0.json"
    result_file.write_text(
        json.dumps(
            [_counter_report("A", passedScenarios=2), _counter_report("B", failedScenarios=1)]
        ),
        encoding="utf-8",
    )

    first = parse_result_file(result_file)
    second = parse_result_file(result_file)

    assert first == second
    assert [result.name for result in first] == ["A", "B"]


def _counter_json(**overrides: object) -> str:
    return json.dumps([{**_counter_report("x"), **overrides}])


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("", "not valid JSON"),
        ("{not json", "not valid JSON"),
        ('{"name": "x"}', "root must be an array"),
        ("[1]", "must be an object"),
        (_counter_json(failedScenarios=-1), "non-negative integer"),
        (_counter_json(failedScenarios="2"), "non-negative integer"),
        (_counter_json(passedSteps=True), "non-negative integer"),
        ('[{"name": "x", "passedScenarios": 1}]', "missing counters failedScenarios"),
        ('[{"foo": 1}]', "neither counters nor 'elements'"),
        ('[{"name": "x", "elements": {}}]', "'elements' must be an array"),
        ('[{"name": "x", "elements": [{"steps": [{}]}]}]', "result status"),
    ],
)
def test_malformed_content_raises(tmp_path: Path, content: str, message: str) -> None:
    result_file = tmp_path / "feature-batch-0.json"
    result_file.write_text(content, encoding="utf-8")

    with pytest.raises(ResultParseError, match=message):
        parse_result_file(result_file)


def test_unreadable_result_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ResultParseError, match="Failed to read"):
        parse_result_file(tmp_path / "absent.json")


def test_deeply_nested_document_raises_parse_error(tmp_path: Path) -> None:
    result_file = tmp_path / "feature-batch-0.json"
    result_file.write_text("[" * 200_000, encoding="utf-8")

    with pytest.raises(ResultParseError, match="not valid JSON"):
        parse_result_file(result_file)
