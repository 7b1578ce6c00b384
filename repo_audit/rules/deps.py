"""Advisory reminder when lockfiles change between two revisions."""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from repo_audit.result import CheckResult
from repo_audit.utils.vcs import changed_files

LOCKFILES = ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")


class DependencyChangeCheck:
    """Compare two revisions and list the lockfiles that moved as notices.

    This check never fails: it runs from ``post-merge`` and ``post-checkout``
    hooks where a non-zero exit would only add noise.
    """

    def __init__(
        self,
        name: str = "deps-check",
        diff: Callable[[str, str], Sequence[str]] = changed_files,
    ) -> None:
        self.name = name
        self._diff = diff

    def evaluate(self, target: Tuple[str, str]) -> CheckResult:
        old_rev, new_rev = target
        result = CheckResult(check=self.name)
        result.notices = [
            path for path in self._diff(old_rev, new_rev) if any(lockfile in path for lockfile in LOCKFILES)
        ]
        return result

    def text_report(self, result: CheckResult) -> List[str]:
        if not result.notices:
            return []
        return [
            "⚠️  Dependencies changed!",
            *(f"   {path}" for path in result.notices),
            "Run 'npm install' or 'yarn' to update your local dependencies.",
        ]
