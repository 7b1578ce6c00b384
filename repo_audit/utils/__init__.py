"""Utility helpers for audit checks."""

from .fileio import physical_lines, read_config_file, read_text_file
from .vcs import changed_files, current_branch

__all__ = [
    "physical_lines",
    "read_config_file",
    "read_text_file",
    "changed_files",
    "current_branch",
]
