"""Flag files larger than the configured limit."""

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from repo_audit.config import AuditConfig
from repo_audit.ignore import IgnorePredicate
from repo_audit.result import CheckResult, Violation
from repo_audit.scan import run_check

BUILD_OUTPUT_DIRS = ("target",)


def is_build_output(path: str) -> bool:
    return any(path.startswith(f"{name}/") or f"/{name}/" in path for name in BUILD_OUTPUT_DIRS)


class FileSizeCheck:
    """Compare each file's byte length against ``max_size_bytes``.

    A file exactly at the limit passes. Files that vanish between listing and
    ``stat`` are skipped.
    """

    name = "file-size"

    def __init__(self, max_size_bytes: int, ignore: IgnorePredicate, max_workers: Optional[int] = None) -> None:
        self.max_size_bytes = max_size_bytes
        self.ignore = ignore
        self._max_workers = max_workers

    def evaluate(self, target: Sequence[str]) -> CheckResult:
        candidates = [
            path
            for path in target
            if not is_build_output(path) and not self.ignore.is_configured_exclusion(path)
        ]
        return run_check(self.name, candidates, self.measure, self._max_workers)

    def measure(self, path: str) -> List[Violation]:
        try:
            size = os.stat(path).st_size
        except OSError:
            return []
        if size <= self.max_size_bytes:
            return []
        return [
            Violation(
                file=path,
                line=None,
                message=f"File size {size} bytes exceeds limit of {self.max_size_bytes} bytes",
            )
        ]

    def text_report(self, result: CheckResult) -> List[str]:
        return [f"❌ File too large: {violation.file} ({violation.message})" for violation in result.violations]


def file_size_check(config: AuditConfig, max_workers: Optional[int] = None) -> FileSizeCheck:
    return FileSizeCheck(config.files.max_size_bytes, config.ignore_predicate(), max_workers=max_workers)
