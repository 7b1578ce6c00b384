"""Exception hierarchy shared by checks, configuration and git helpers."""

from __future__ import annotations


class AuditError(Exception):
    """Base class for failures that abort a check before it produces a result."""


class ConfigError(AuditError):
    """Raised when configuration cannot be used as written."""


class PatternError(ConfigError):
    """A user-supplied pattern failed to compile."""

    def __init__(self, family: str, pattern: str, reason: str) -> None:
        self.family = family
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid {family} pattern {pattern!r}: {reason}")


class VcsError(AuditError):
    """Raised when a git query cannot be completed."""
