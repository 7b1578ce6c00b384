"""Enforce ``type/description`` branch naming."""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from repo_audit.result import CheckResult, Violation
from repo_audit.utils.vcs import current_branch

EXEMPT_BRANCHES = frozenset({"main", "master", "develop", "HEAD"})
BRANCH_TYPES = ("feature", "fix", "hotfix", "release", "chore", "docs", "refactor", "test")
BRANCH_PATTERN = re.compile(
    rf"(?:{'|'.join(BRANCH_TYPES)})/[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
)


def is_valid_branch_name(branch: str) -> bool:
    return branch in EXEMPT_BRANCHES or BRANCH_PATTERN.fullmatch(branch) is not None


class BranchNameCheck:
    name = "branch-name"

    def __init__(self, branch_lookup: Callable[[], str] = current_branch) -> None:
        self._branch_lookup = branch_lookup

    def evaluate(self, target: Optional[str] = None) -> CheckResult:
        """Validate ``target``, or the checked-out branch when it is ``None``.

        A failed git lookup raises ``VcsError``.
        """

        branch = target if target is not None else self._branch_lookup()
        result = CheckResult(check=self.name)
        if not is_valid_branch_name(branch):
            result.add_violation(Violation(file="", line=None, message=f"Invalid branch name: {branch}"))
        return result

    def text_report(self, result: CheckResult) -> List[str]:
        if result.passed:
            return []
        return [
            "❌ Invalid branch name!",
            *(violation.message for violation in result.violations),
            "Expected format: type/description",
            f"Types: {', '.join(BRANCH_TYPES)}",
        ]
