"""Bindings and diagnostics artifact generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from artifacts.models import BindingRecord, DiagnosticRecord, PropertyEntry
from artifacts.utils import _get_output_dir_name, _write_jsonl
from contract.artifacts import BINDINGS_JSONL, DIAGNOSTICS_JSONL
from databinding.scan import ScanResult, scan_document
from markup.document import parse_html
from model.expressions import AttributeSite
from scan.files import find_markup_files

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from model.diagnostics import Diagnostic
    from model.expressions import BindingExpression
    from settings.config import BindscanConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileScan:
    """Scan result for one markup file."""

    path: str
    result: ScanResult


def scan_repository(
    root: Path, config: BindscanConfig, *, output_dir: str = ""
) -> Iterator[FileScan]:
    """Scan every markup file under ``root`` in sorted path order.

    Files that cannot be read or are not UTF-8 are skipped with a warning.
    """
    predicate = config.templates.predicate()
    for file_path in find_markup_files(
        root,
        extensions=config.extensions,
        output_dir=output_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        relative_path = file_path.relative_to(root).as_posix()
        try:
            contents = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", relative_path, exc)
            continue

        document = parse_html(contents, relative_path)
        result = scan_document(document, predicate)
        logger.debug(
            "%s: %d expressions, %d warnings",
            relative_path,
            len(result.expressions),
            len(result.warnings),
        )
        yield FileScan(path=relative_path, result=result)


def binding_record(path: str, expression: BindingExpression) -> BindingRecord:
    site = expression.site
    attribute_fields: dict[str, Any] = {}
    if isinstance(site, AttributeSite):
        attribute_fields = {
            "attribute_name": site.attribute_name,
            "is_complete_binding": site.is_complete_binding,
            "event_name": site.event_name,
        }
    return BindingRecord(
        path=path,
        kind=expression.kind,
        direction=expression.direction,
        expression_text=expression.expression_text,
        source_range=expression.source_range,
        properties=[
            PropertyEntry(name=prop.name, source_range=prop.source_range)
            for prop in expression.properties
        ],
        **attribute_fields,
    )


def diagnostic_record(path: str, diagnostic: Diagnostic) -> DiagnosticRecord:
    return DiagnosticRecord(
        path=path,
        code=diagnostic.code,
        severity=diagnostic.severity,
        message=diagnostic.message,
        source_range=diagnostic.source_range,
    )


def _record_sort_key(
    record: BindingRecord | DiagnosticRecord,
) -> tuple[str, int, int]:
    start = record.source_range.start
    return (record.path, start.line, start.column)


class BindingsGenerator:
    """Generates bindings.jsonl and diagnostics.jsonl from markup files."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "bindings"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        config: BindscanConfig,
    ) -> tuple[list[BindingRecord], list[DiagnosticRecord]]:
        """Generate both artifacts and return the records written."""
        out_dir.mkdir(parents=True, exist_ok=True)

        bindings: list[BindingRecord] = []
        diagnostics: list[DiagnosticRecord] = []
        min_rank = config.min_severity.rank
        file_count = 0

        for file_scan in scan_repository(
            root, config, output_dir=_get_output_dir_name(out_dir, root)
        ):
            file_count += 1
            bindings.extend(
                binding_record(file_scan.path, expression)
                for expression in file_scan.result.expressions
            )
            diagnostics.extend(
                diagnostic_record(file_scan.path, warning)
                for warning in file_scan.result.warnings
                if warning.severity.rank >= min_rank
            )

        # Nested templates are scanned after their parent, so restore position
        # order within each file.
        bindings.sort(key=_record_sort_key)
        diagnostics.sort(key=_record_sort_key)

        _write_jsonl(out_dir / BINDINGS_JSONL, bindings)
        _write_jsonl(out_dir / DIAGNOSTICS_JSONL, diagnostics)
        logger.info(
            "Scanned %d files: %d bindings, %d diagnostics",
            file_count,
            len(bindings),
            len(diagnostics),
        )

        return bindings, diagnostics


__all__ = [
    "BindingsGenerator",
    "FileScan",
    "binding_record",
    "diagnostic_record",
    "scan_repository",
]
