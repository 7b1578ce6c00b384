"""Reject JSON files that do not parse."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Sequence

from repo_audit.config import AuditConfig
from repo_audit.ignore import IgnorePredicate
from repo_audit.result import CheckResult, Violation
from repo_audit.scan import run_check

LOCKFILE_NAME = "package-lock.json"


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant {name}")


class JsonValidateCheck:
    """Parse each candidate ``.json`` file as a whole document.

    Unlike the line scanners, a file that cannot be read here is reported:
    the caller asked for it to be validated.
    """

    name = "json-validate"

    def __init__(self, ignore: IgnorePredicate, max_workers: Optional[int] = None) -> None:
        self.ignore = ignore
        self._max_workers = max_workers

    def is_candidate(self, path: str) -> bool:
        return (
            path.endswith(".json")
            and not path.endswith(LOCKFILE_NAME)
            and not self.ignore.is_configured_exclusion(path)
        )

    def evaluate(self, target: Sequence[str]) -> CheckResult:
        candidates = [path for path in target if self.is_candidate(path)]
        return run_check(self.name, candidates, self.validate, self._max_workers)

    def validate(self, path: str) -> List[Violation]:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return [Violation(file=path, line=None, message=f"Failed to read file: {exc}")]
        try:
            json.loads(content, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            return [Violation(file=path, line=None, message=f"Invalid JSON: {exc}")]
        return []

    def text_report(self, result: CheckResult) -> List[str]:
        return [f"❌ {violation.file}: {violation.message}" for violation in result.violations]


def json_check(config: AuditConfig, max_workers: Optional[int] = None) -> JsonValidateCheck:
    return JsonValidateCheck(config.ignore_predicate(), max_workers=max_workers)
