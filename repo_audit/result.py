"""Core result data structures for audit checks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

EXIT_SUCCESS = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


@dataclass(frozen=True)
class Violation:
    """Capture a single reportable finding."""

    file: str
    line: Optional[int]
    message: str
    pattern: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": self.file,
            "line": self.line,
            "message": self.message,
        }
        if self.pattern is not None:
            data["pattern"] = self.pattern
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Violation":
        line = data.get("line")
        pattern = data.get("pattern")
        return cls(
            file=str(data.get("file", "")),
            line=int(line) if line is not None else None,
            message=str(data.get("message", "")),
            pattern=str(pattern) if pattern is not None else None,
        )


@dataclass
class CheckResult:
    """Outcome of one named check: verdict plus ordered violations."""

    check: str
    passed: bool = True
    violations: List[Violation] = field(default_factory=list)
    # advisory lines that do not affect the verdict
    notices: List[str] = field(default_factory=list)

    def add_violation(self, violation: Violation) -> None:
        self.passed = False
        self.violations.append(violation)

    def extend(self, violations: Iterable[Violation]) -> None:
        for violation in violations:
            self.add_violation(violation)

    def exit_code(self) -> int:
        return EXIT_SUCCESS if self.passed else EXIT_VIOLATIONS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "check": self.check,
            "passed": self.passed,
            "violations": [violation.to_dict() for violation in self.violations],
        }
        if self.notices:
            data["notices"] = list(self.notices)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CheckResult":
        """Rebuild a result from its structured document form."""

        result = cls(check=str(data.get("check", "")))
        result.extend(Violation.from_dict(item) for item in data.get("violations") or [])
        result.notices = [str(notice) for notice in data.get("notices") or []]
        # a document may carry a failed verdict without violation records
        if data.get("passed") is False:
            result.passed = False
        return result


def error_document(message: str, exit_code: int = EXIT_RUNTIME_ERROR) -> str:
    """Structured output emitted instead of a result when a check aborts."""

    return json.dumps({"error": message, "exit_code": exit_code}, indent=2)


def format_summary(result: CheckResult) -> str:
    """Create the closing human-readable status line for console output."""

    count = len(result.violations)
    if result.passed:
        return f"✅ {result.check}: passed"
    noun = "violation" if count == 1 else "violations"
    return f"❌ {result.check}: failed with {count} {noun}"
