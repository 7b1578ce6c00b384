"""Conventional-commit subject checks run from the ``commit-msg`` hook."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from repo_audit.result import CheckResult, Violation
from repo_audit.utils.fileio import physical_lines

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "perf", "test", "chore", "build", "ci")
CONVENTIONAL_PATTERN = re.compile(rf"(revert: )?({'|'.join(COMMIT_TYPES)})(\(.+\))?: .+")
MERGE_PREFIXES = ("Merge branch", "Merge pull request")
MAX_SUBJECT_LENGTH = 72


def read_subject(path: str) -> str:
    """Return the trimmed first line of a commit message file.

    Unlike scanned files, the message file is required input: ``OSError``
    propagates to the caller.
    """

    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        lines = physical_lines(handle.read())
    return lines[0].strip() if lines else ""


def is_conventional(subject: str) -> bool:
    if subject.startswith(MERGE_PREFIXES):
        return True
    return CONVENTIONAL_PATTERN.match(subject) is not None


class CommitMessageCheck:
    name = "commit-msg"

    def evaluate(self, target: str) -> CheckResult:
        subject = read_subject(target)
        result = CheckResult(check=self.name)
        if not is_conventional(subject):
            result.add_violation(Violation(file=target, line=1, message=f"Invalid commit message: {subject}"))
        return result

    def text_report(self, result: CheckResult) -> List[str]:
        if result.passed:
            return []
        return [
            "❌ Invalid commit message format!",
            *(violation.message for violation in result.violations),
            "Use conventional commits: type(scope?): subject",
            f"Types: {', '.join(COMMIT_TYPES)}",
        ]


class CommitLengthCheck:
    name = "commit-msg-length"

    def __init__(self, max_length: int = MAX_SUBJECT_LENGTH) -> None:
        self.max_length = max_length

    def evaluate(self, target: str) -> CheckResult:
        subject = read_subject(target)
        result = CheckResult(check=self.name)
        if len(subject) > self.max_length:
            result.add_violation(
                Violation(
                    file=target,
                    line=1,
                    message=f"Commit subject is {len(subject)} characters (max {self.max_length})",
                )
            )
        return result

    def text_report(self, result: CheckResult) -> List[str]:
        if result.passed:
            return []
        return ["❌ Commit subject too long!", *(violation.message for violation in result.violations)]
