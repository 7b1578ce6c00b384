"""Line and path suppression shared by every check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

IGNORE_MARKERS: Tuple[str, ...] = (
    "// audit-ignore",
    "/* audit-ignore */",
    "# audit-ignore",
    "// @audit-ignore",
    "/* @audit-ignore */",
)

SKIP_SUFFIXES: Tuple[str, ...] = (".example", ".sample", ".md", ".lock")


@dataclass(frozen=True)
class IgnorePredicate:
    """Decide whether a line or a path is left out of evaluation."""

    markers: Tuple[str, ...] = IGNORE_MARKERS
    skip_suffixes: Tuple[str, ...] = SKIP_SUFFIXES
    excluded_paths: Tuple[str, ...] = ()

    def line_is_ignored(self, line: str) -> bool:
        return any(marker in line for marker in self.markers)

    def is_configured_exclusion(self, path: str) -> bool:
        return any(fragment in path for fragment in self.excluded_paths)

    def path_is_excluded(self, path: str) -> bool:
        return path.endswith(self.skip_suffixes) or self.is_configured_exclusion(path)
