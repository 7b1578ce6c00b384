"""Rule-based audit checks for CI pipelines and git hooks."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("repo-audit")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
