"""Basic file IO helpers."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, List, Optional

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_toml_file(path: Path) -> Any:
    """Return the parsed TOML table if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("rb") as handle:
        return tomllib.load(handle)


def read_config_file(path: Path) -> Any:
    """Parse a configuration file, choosing the format from its suffix.

    Raises ``OSError`` when the file cannot be read and the parser's own error
    (``yaml.YAMLError`` or ``tomllib.TOMLDecodeError``) when it is malformed.
    """

    if path.suffix.lower() in YAML_SUFFIXES:
        return read_yaml_file(path)
    return read_toml_file(path)


def read_text_file(path: Path) -> Optional[str]:
    """Return the file contents as UTF-8 text with line endings untouched.

    Missing, unreadable and binary files all yield ``None``.
    """

    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


def physical_lines(text: str) -> List[str]:
    """Split ``text`` at ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Unlike ``str.splitlines`` this keeps form feeds, ``\\x85`` and the Unicode
    line/paragraph separators inside the line they appear on, so line numbers
    match what editors and git show.
    """

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
