"""Command-line interface for bindscan."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.generators import scan_repository
from artifacts.utils import _get_output_dir_name
from artifacts.write import generate_all_artifacts
from contract.validation import validate_artifacts
from model.diagnostics import Severity
from settings.config import ConfigError, load_config, resolve_output_dir
from verify.verify import verify_determinism

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_HANDLER_NAME = "bindscan"


def configure_logging(*, verbose: bool = False) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace a handler left by an earlier call
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bindscan")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate artifacts")
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    check_parser = subparsers.add_parser(
        "check", help="Report binding diagnostics without writing artifacts"
    )
    _add_common_paths(check_parser)

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, out_dir: str | None) -> int:
    summary = generate_all_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    sys.stdout.write(
        f"{summary['binding_count']} bindings, "
        f"{summary['diagnostic_count']} diagnostics\n"
    )
    return 0


def _handle_check(root: Path) -> int:
    config = load_config(root)
    min_rank = config.min_severity.rank
    warning_count = 0
    output_dir_name = _get_output_dir_name(
        resolve_output_dir(root, config.output_dir), root
    )
    for file_scan in scan_repository(root, config, output_dir=output_dir_name):
        for warning in file_scan.result.warnings:
            if warning.severity.rank < min_rank:
                continue
            if warning.severity is Severity.WARNING:
                warning_count += 1
            start = warning.source_range.start
            sys.stdout.write(
                f"{file_scan.path}:{start.line + 1}:{start.column + 1}: "
                f"{warning.severity.value} [{warning.code.value}] "
                f"{warning.message}\n"
            )
    return 1 if warning_count else 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        for detail in result.details:
            if detail.line:
                sys.stderr.write(
                    f"  {detail.filename}:{detail.line}: first differing record\n"
                )
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "generate":
            return _handle_generate(root, args.out_dir)

        if args.command == "check":
            return _handle_check(root)

        if args.command == "validate":
            return _handle_validate(root, args.artifacts_dir)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
