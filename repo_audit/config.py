"""Effective configuration: built-in defaults merged with ``.audit.toml``/``.audit.yaml``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple

import structlog
import yaml

from .errors import ConfigError
from .ignore import IgnorePredicate
from .utils.fileio import read_config_file

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILES = (".audit.toml", ".audit.yaml", ".audit.yml")
DEFAULT_MAX_SIZE_BYTES = 500 * 1024
OUTPUT_FORMATS = ("text", "json")


def _string_tuple(section: str, key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{section}.{key} must be a list of strings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{section}.{key} must be a list of strings")
    return tuple(value)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return value


@dataclass(frozen=True)
class SecretsConfig:
    extra_patterns: Tuple[str, ...] = ()
    # lines matching any of these regexes are never reported as secrets
    exclude_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DebugConfig:
    extra_patterns: Tuple[str, ...] = ()
    # empty means every file extension is scanned
    extensions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FilesConfig:
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES
    exclude_paths: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OutputConfig:
    format: str = "text"


@dataclass(frozen=True)
class AuditConfig:
    """Read-only configuration shared by every check in one invocation."""

    secrets: SecretsConfig = field(default_factory=SecretsConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuditConfig":
        """Validate a parsed configuration document.

        Missing sections and keys take their defaults; a value of the wrong
        type raises :class:`ConfigError`.
        """

        if not isinstance(data, Mapping):
            raise ConfigError("configuration root must be a table")

        secrets = _section(data, "secrets")
        debug = _section(data, "debug")
        files = _section(data, "files")
        output = _section(data, "output")

        max_size = files.get("max_size_bytes", DEFAULT_MAX_SIZE_BYTES)
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 0:
            raise ConfigError("files.max_size_bytes must be a non-negative integer")

        report_format = output.get("format", "text")
        if report_format not in OUTPUT_FORMATS:
            raise ConfigError(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}")

        extensions = _string_tuple("debug", "extensions", debug.get("extensions"))
        return cls(
            secrets=SecretsConfig(
                extra_patterns=_string_tuple("secrets", "extra_patterns", secrets.get("extra_patterns")),
                exclude_patterns=_string_tuple("secrets", "exclude_patterns", secrets.get("exclude_patterns")),
            ),
            debug=DebugConfig(
                extra_patterns=_string_tuple("debug", "extra_patterns", debug.get("extra_patterns")),
                extensions=tuple(ext.lstrip(".").lower() for ext in extensions if ext),
            ),
            files=FilesConfig(
                max_size_bytes=max_size,
                exclude_paths=tuple(
                    path for path in _string_tuple("files", "exclude_paths", files.get("exclude_paths")) if path
                ),
            ),
            output=OutputConfig(format=report_format),
        )

    def ignore_predicate(self) -> IgnorePredicate:
        return IgnorePredicate(excluded_paths=self.files.exclude_paths)

    def is_excluded(self, path: str) -> bool:
        return self.ignore_predicate().is_configured_exclusion(path)


def _find_config_file(candidates: Iterable[str]) -> Optional[Path]:
    for name in candidates:
        path = Path(name)
        if path.is_file():
            return path
    return None


def load_config(path: Optional[str | Path] = None, strict: bool = False) -> AuditConfig:
    """Load configuration, falling back to defaults on any problem.

    Without ``path`` the first existing file of :data:`DEFAULT_CONFIG_FILES`
    is used. A missing file is not a problem. An unreadable or malformed one
    logs a warning and yields defaults, unless ``strict`` is set, in which case
    :class:`ConfigError` is raised.
    """

    config_path = Path(path) if path is not None else _find_config_file(DEFAULT_CONFIG_FILES)
    if config_path is None or not config_path.exists():
        if path is not None and strict:
            raise ConfigError(f"Config file not found: {config_path}")
        return AuditConfig()

    try:
        data = read_config_file(config_path)
        if data is None:
            return AuditConfig()
        config = AuditConfig.from_dict(data)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError, ConfigError) as exc:
        if strict:
            raise ConfigError(f"Failed to load {config_path}: {exc}") from exc
        logger.warning("config_load_failed", path=str(config_path), error=str(exc))
        return AuditConfig()

    logger.debug("config_loaded", path=str(config_path))
    return config
