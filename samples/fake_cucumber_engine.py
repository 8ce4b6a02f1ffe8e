"""Stand-in test-execution engine for demos and integration tests.

Accepts the same arguments the runner passes to a real engine. The first line of
each feature file selects what the engine reports for it:

  # outcome: passed | failed | undefined | filtered | crash | garbage
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

_STEP_STATUSES = {
    "passed": ["passed", "passed", "passed"],
    "failed": ["passed", "failed", "skipped"],
    "undefined": ["passed", "undefined"],
}


def _outcome(feature: Path) -> str:
    first_line = feature.read_text(encoding="utf-8").splitlines()[0]
    return first_line.split(":", 1)[1].strip()


def _report(feature: Path, outcome: str) -> dict[str, object]:
    return {
        "uri": str(feature),
        "name": feature.stem,
        "elements": [
            {
                "type": "scenario",
                "name": f"{feature.stem} scenario",
                "steps": [
                    {"keyword": "Given ", "name": "a step", "result": {"status": status}}
                    for status in _STEP_STATUSES[outcome]
                ],
            }
        ],
    }


def main(args: list[str]) -> int:
    result_path = None
    for index, arg in enumerate(args[:-1]):
        if arg == "--plugin" and args[index + 1].startswith("json:"):
            result_path = Path(args[index + 1][len("json:") :])
    features = [Path(arg) for arg in args if arg.endswith(".feature")]
    outcomes = [_outcome(feature) for feature in features]
    print("Running " + " ".join(feature.name for feature in features))

    if result_path is None or "crash" in outcomes:
        print("engine crashed while parsing features", file=sys.stderr)
        return 2
    if "garbage" in outcomes:
        result_path.write_text('[{"name": ', encoding="utf-8")
        return 1
    reports = [
        _report(feature, outcome)
        for feature, outcome in zip(features, outcomes)
        if outcome != "filtered"
    ]
    if not reports:
        result_path.write_text("[ ]\n", encoding="utf-8")
        return 0
    result_path.write_text(json.dumps(reports, indent=2), encoding="utf-8")
    for outcome in outcomes:
        if outcome != "passed" and outcome != "filtered":
            print(f"scenario {outcome}")
    return 1 if "failed" in outcomes else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
