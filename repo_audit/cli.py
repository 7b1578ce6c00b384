"""Command-line entry point for the audit checks."""

from __future__ import annotations

import argparse
import sys
from typing import Any, List, Optional, Tuple

import structlog

from . import __version__
from .config import OUTPUT_FORMATS, AuditConfig, load_config
from .errors import AuditError, ConfigError
from .log import configure_logging
from .result import EXIT_CONFIG_ERROR, EXIT_RUNTIME_ERROR, CheckResult, error_document, format_summary
from .rules import Check
from .rules.branch_name import BranchNameCheck
from .rules.commit_msg import CommitLengthCheck, CommitMessageCheck
from .rules.deps import DependencyChangeCheck
from .rules.file_size import file_size_check
from .rules.json_validate import json_check
from .rules.line_patterns import debug_check, secrets_check

FILE_LIST_COMMANDS = {
    "no-debug": ("Check for debug statements", debug_check),
    "secrets-check": ("Check for potential secrets", secrets_check),
    "json-validate": ("Validate JSON files", json_check),
    "file-size": ("Check file sizes", file_size_check),
}

logger = structlog.get_logger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _global_options(suppress_defaults: bool) -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand name."""

    default = argparse.SUPPRESS if suppress_defaults else None
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=default,
        help="Output format (defaults to output.format from the config file, else text).",
    )
    parent.add_argument(
        "--config",
        default=default,
        help="Configuration file (defaults to .audit.toml, .audit.yaml or .audit.yml).",
    )
    parent.add_argument(
        "--strict-config",
        action="store_true",
        default=argparse.SUPPRESS if suppress_defaults else False,
        help="Fail instead of falling back to defaults when the config file is invalid.",
    )
    parent.add_argument(
        "--workers",
        type=positive_int,
        default=default,
        help="Maximum worker threads for file checks.",
    )
    parent.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=argparse.SUPPRESS if suppress_defaults else False,
        help="Log diagnostics to stderr.",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-audit",
        description="Policy checks for CI pipelines and git hooks.",
        parents=[_global_options(suppress_defaults=False)],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    shared = _global_options(suppress_defaults=True)
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, (help_text, _factory) in FILE_LIST_COMMANDS.items():
        sub = subparsers.add_parser(command, help=help_text, parents=[shared])
        sub.add_argument("files", nargs="*", help="Files to check.")

    branch = subparsers.add_parser("branch-name", help="Validate branch naming", parents=[shared])
    branch.add_argument("--branch", default=None, help="Branch to validate instead of the checked-out one.")

    commit = subparsers.add_parser("commit-msg", help="Validate commit message format", parents=[shared])
    commit.add_argument("file", help="Path to commit message file.")

    length = subparsers.add_parser("commit-msg-length", help="Check commit message length", parents=[shared])
    length.add_argument("file", help="Path to commit message file.")

    deps = subparsers.add_parser("deps-check", help="Check dependencies", parents=[shared])
    deps.add_argument("old_head")
    deps.add_argument("new_head")

    subparsers.add_parser("deps-reminder", help="Reminder to check dependencies", parents=[shared])
    return parser


def build_check(args: argparse.Namespace, config: AuditConfig) -> Tuple[Check, Any]:
    """Construct the check named by ``args.command`` and the input it runs on."""

    command = args.command
    if command in FILE_LIST_COMMANDS:
        factory = FILE_LIST_COMMANDS[command][1]
        return factory(config, max_workers=args.workers), list(args.files)
    if command == "branch-name":
        return BranchNameCheck(), args.branch
    if command == "commit-msg":
        return CommitMessageCheck(), args.file
    if command == "commit-msg-length":
        return CommitLengthCheck(), args.file
    if command == "deps-check":
        return DependencyChangeCheck("deps-check"), (args.old_head, args.new_head)
    if command == "deps-reminder":
        return DependencyChangeCheck("deps-reminder"), ("ORIG_HEAD", "HEAD")
    raise ValueError(f"Unknown command: {command}")  # pragma: no cover


def write_output(check: Check, result: CheckResult, report_format: str) -> None:
    if report_format == "json":
        print(result.to_json())
        return
    for line in check.text_report(result):
        print(line)
    print(format_summary(result))


def write_error(message: str, report_format: str, exit_code: int) -> None:
    if report_format == "json":
        print(error_document(message, exit_code))
    else:
        print(f"Error: {message}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    report_format = args.format or "text"
    try:
        config = load_config(args.config, strict=args.strict_config)
        report_format = args.format or config.output.format
        check, target = build_check(args, config)
        result = check.evaluate(target)
    except ConfigError as exc:
        write_error(str(exc), report_format, EXIT_CONFIG_ERROR)
        return EXIT_CONFIG_ERROR
    except (AuditError, OSError, UnicodeDecodeError) as exc:
        write_error(str(exc), report_format, EXIT_RUNTIME_ERROR)
        return EXIT_RUNTIME_ERROR
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("check_crashed", command=args.command)
        write_error(f"Unexpected error: {exc}", report_format, EXIT_RUNTIME_ERROR)
        return EXIT_RUNTIME_ERROR

    write_output(check, result, report_format)
    return result.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
