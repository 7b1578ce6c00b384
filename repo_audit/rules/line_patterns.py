"""Line-oriented pattern checks: hardcoded secrets and leftover debug statements."""

from __future__ import annotations

from pathlib import PurePath
from typing import Callable, List, Optional, Sequence, Tuple

import structlog

from repo_audit.config import AuditConfig
from repo_audit.ignore import IgnorePredicate
from repo_audit.result import CheckResult, Violation
from repo_audit.ruleset import (
    DEBUG_FAMILY,
    DEBUG_PATTERNS,
    SECRET_EXCLUSION_FAMILY,
    SECRET_FAMILY,
    SECRET_PATTERNS,
    RuleSet,
    build_rule_set,
)
from repo_audit.scan import LineMatch, MatchTally, run_check, scan_file, scan_text

logger = structlog.get_logger(__name__)

# environment lookups, not literals
BENIGN_SECRET_SUBSTRINGS = ("process.env", "NEXT_PUBLIC")


class LinePatternCheck:
    """Report the first matching rule on each line of each input file.

    The rule set and ignore predicate are built once and only read while
    scanning, so files are scanned concurrently without locking.
    """

    def __init__(
        self,
        name: str,
        rules: RuleSet,
        ignore: IgnorePredicate,
        message: Callable[[LineMatch], str],
        *,
        attribute_pattern: bool = False,
        benign_substrings: Tuple[str, ...] = (),
        exclusions: Optional[RuleSet] = None,
        extensions: Tuple[str, ...] = (),
        max_workers: Optional[int] = None,
    ) -> None:
        self.name = name
        self.rules = rules
        self.ignore = ignore
        self._message = message
        self._attribute_pattern = attribute_pattern
        self._benign_substrings = benign_substrings
        self._exclusions = exclusions
        self._extensions = extensions
        self._max_workers = max_workers
        self.tally = MatchTally()

    def evaluate(self, target: Sequence[str]) -> CheckResult:
        # counts cover this run only
        self.tally = MatchTally()
        result = run_check(self.name, list(target), self.scan, self._max_workers)
        logger.debug("line_matches", check=self.name, count=self.tally.count)
        return result

    def scan(self, path: str) -> List[Violation]:
        if not self._extension_allowed(path):
            return []
        matches = scan_file(path, self.rules, self.ignore, self._skip_line)
        return self._to_violations(path, matches)

    def scan_text(self, text: str, label: str = "<text>") -> List[Violation]:
        """Scan an in-memory blob as though it were the file ``label``."""

        matches = scan_text(text, self.rules, self.ignore, self._skip_line)
        return self._to_violations(label, matches)

    def text_report(self, result: CheckResult) -> List[str]:
        lines: List[str] = []
        for violation in result.violations:
            lines.append(f"❌ {violation.file}:{violation.line}: {violation.message}")
            if violation.pattern is not None:
                lines.append(f"   Pattern: {violation.pattern}")
        return lines

    def _to_violations(self, path: str, matches: List[LineMatch]) -> List[Violation]:
        if matches:
            self.tally.add(len(matches))
        return [
            Violation(
                file=path,
                line=match.line_number,
                message=self._message(match),
                pattern=match.rule.source_text if self._attribute_pattern else None,
            )
            for match in matches
        ]

    def _skip_line(self, line: str) -> bool:
        if any(fragment in line for fragment in self._benign_substrings):
            return True
        return self._exclusions is not None and self._exclusions.first_match(line) is not None

    def _extension_allowed(self, path: str) -> bool:
        if not self._extensions:
            return True
        return PurePath(path).suffix.lstrip(".").lower() in self._extensions


def secrets_check(config: AuditConfig, max_workers: Optional[int] = None) -> LinePatternCheck:
    """Build the ``secrets-check`` check; raises ``PatternError`` on a bad extra pattern."""

    rules = build_rule_set(SECRET_FAMILY, SECRET_PATTERNS, config.secrets.extra_patterns)
    exclusions = build_rule_set(SECRET_EXCLUSION_FAMILY, (), config.secrets.exclude_patterns)
    return LinePatternCheck(
        "secrets-check",
        rules,
        config.ignore_predicate(),
        lambda match: "Potential secret detected",
        attribute_pattern=True,
        benign_substrings=BENIGN_SECRET_SUBSTRINGS,
        exclusions=exclusions if len(exclusions) else None,
        max_workers=max_workers,
    )


def debug_check(config: AuditConfig, max_workers: Optional[int] = None) -> LinePatternCheck:
    """Build the ``no-debug`` check; raises ``PatternError`` on a bad extra pattern."""

    rules = build_rule_set(DEBUG_FAMILY, DEBUG_PATTERNS, config.debug.extra_patterns)
    return LinePatternCheck(
        "no-debug",
        rules,
        config.ignore_predicate(),
        lambda match: f"Debug statement: {match.text}",
        extensions=config.debug.extensions,
        max_workers=max_workers,
    )
