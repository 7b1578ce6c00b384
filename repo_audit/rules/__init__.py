"""Check protocol implemented by every audit rule family."""

from __future__ import annotations

from typing import Any, List, Protocol

from repo_audit.result import CheckResult


class Check(Protocol):
    """A named audit operation.

    ``evaluate`` takes the check's own input (a list of paths, a branch name,
    a commit message path, a pair of revisions) and returns a complete result.
    ``text_report`` renders that result for the console, one string per line.
    """

    name: str

    def evaluate(self, target: Any) -> CheckResult:
        """Run the check against ``target``."""

    def text_report(self, result: CheckResult) -> List[str]:
        """Human-readable lines describing ``result``."""
