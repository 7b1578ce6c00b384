"""Line scanning and parallel fan-out across input files."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

import structlog

from .ignore import IgnorePredicate
from .result import CheckResult, Violation
from .ruleset import Rule, RuleSet
from .utils.fileio import physical_lines, read_text_file

logger = structlog.get_logger(__name__)

T = TypeVar("T")

LineFilter = Callable[[str], bool]


@dataclass(frozen=True)
class LineMatch:
    """First rule that matched a physical line."""

    line_number: int
    text: str
    rule: Rule


def scan_text(
    text: str,
    rules: RuleSet,
    ignore: IgnorePredicate,
    skip_line: Optional[LineFilter] = None,
) -> List[LineMatch]:
    """Evaluate ``rules`` against every line of ``text``.

    Lines carrying an ignore marker, or rejected by ``skip_line``, are never
    evaluated. Each remaining line yields at most one match: the first rule in
    order that hits it.
    """

    matches: List[LineMatch] = []
    for line_number, line in enumerate(physical_lines(text), start=1):
        if ignore.line_is_ignored(line):
            continue
        if skip_line is not None and skip_line(line):
            continue
        rule = rules.first_match(line)
        if rule is not None:
            matches.append(LineMatch(line_number=line_number, text=line.strip(), rule=rule))
    return matches


def scan_file(
    path: str,
    rules: RuleSet,
    ignore: IgnorePredicate,
    skip_line: Optional[LineFilter] = None,
) -> List[LineMatch]:
    """Scan one file; excluded, missing, unreadable and binary files yield nothing."""

    if ignore.path_is_excluded(path):
        return []
    file_path = Path(path)
    if not file_path.is_file():
        return []
    content = read_text_file(file_path)
    if content is None:
        logger.debug("file_skipped_unreadable", path=path)
        return []
    return scan_text(content, rules, ignore, skip_line)


class MatchTally:
    """Thread-safe counter for diagnostics only; never drives a verdict."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    def add(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


def run_check(
    name: str,
    inputs: Sequence[T],
    worker: Callable[[T], List[Violation]],
    max_workers: Optional[int] = None,
) -> CheckResult:
    """Fan ``worker`` out over ``inputs`` and merge the per-input violations.

    Workers share nothing mutable; each returns its own list. ``Executor.map``
    yields results in submission order, so the merged violations follow input
    order no matter which worker finishes first.
    """

    result = CheckResult(check=name)
    if not inputs:
        return result
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"audit-{name}") as executor:
        per_input = list(executor.map(worker, inputs))
    for violations in per_input:
        result.extend(violations)
    logger.debug("check_completed", check=name, inputs=len(inputs), violations=len(result.violations))
    return result
