"""Thin wrappers around the git command line."""

from __future__ import annotations

import subprocess
from typing import List, Sequence

from repo_audit.errors import VcsError


def _run_git(args: Sequence[str]) -> str:
    command = ["git", *args]
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        raise VcsError("git executable not found") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise VcsError(f"`{' '.join(command)}` failed: {detail}") from exc
    return completed.stdout


def current_branch() -> str:
    """Return the checked-out branch name (``HEAD`` when detached)."""

    return _run_git(["rev-parse", "--abbrev-ref", "HEAD"]).strip()


def changed_files(old_rev: str, new_rev: str) -> List[str]:
    """List paths that differ between two revisions."""

    output = _run_git(["diff", "--name-only", old_rev, new_rev])
    return [line.strip() for line in output.splitlines() if line.strip()]
