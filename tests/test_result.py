import json

from repo_audit.result import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VIOLATIONS,
    CheckResult,
    Violation,
    error_document,
    format_summary,
)


def test_check_result_violations():
    result = CheckResult("test")
    assert result.passed
    assert result.violations == []
    assert result.exit_code() == EXIT_SUCCESS

    result.add_violation(Violation(file="test.js", line=1, message="Test violation"))

    assert not result.passed
    assert len(result.violations) == 1
    assert result.exit_code() == EXIT_VIOLATIONS


def test_pattern_only_serialized_when_present():
    with_pattern = Violation(file="a.ts", line=3, message="Potential secret detected", pattern="AKIA[0-9A-Z]{16}")
    without_pattern = Violation(file="", line=None, message="Invalid branch name: wip")

    assert with_pattern.to_dict()["pattern"] == "AKIA[0-9A-Z]{16}"
    assert without_pattern.to_dict() == {"file": "", "line": None, "message": "Invalid branch name: wip"}


def test_json_round_trip_preserves_verdict_and_violations():
    result = CheckResult("secrets-check")
    result.add_violation(Violation(file="a.ts", line=3, message="Potential secret detected", pattern="aws[_-]?secret"))
    result.add_violation(Violation(file="b.ts", line=None, message="other"))

    restored = CheckResult.from_dict(json.loads(result.to_json()))

    assert restored.check == "secrets-check"
    assert restored.passed is False
    assert restored.violations == result.violations


def test_round_trip_of_passing_result():
    restored = CheckResult.from_dict(json.loads(CheckResult("file-size").to_json()))

    assert restored.passed is True
    assert restored.violations == []


def test_error_document_and_summary():
    document = json.loads(error_document("git executable not found"))
    assert document == {"error": "git executable not found", "exit_code": EXIT_RUNTIME_ERROR}

    failed = CheckResult("no-debug")
    failed.add_violation(Violation(file="a.js", line=1, message="Debug statement: debugger"))
    assert format_summary(CheckResult("no-debug")) == "✅ no-debug: passed"
    assert format_summary(failed) == "❌ no-debug: failed with 1 violation"


def test_from_dict_tolerates_null_collections():
    restored = CheckResult.from_dict({"check": "no-debug", "passed": True, "violations": None, "notices": None})

    assert restored.passed is True
    assert restored.violations == []
    assert restored.notices == []
