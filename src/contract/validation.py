"""Validation helpers for generated artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import orjson
from pydantic import ValidationError

from contract.artifacts import ARTIFACT_SCHEMA_VERSION, ARTIFACT_SPECS
from contract.models import BindingRecord, DiagnosticRecord

if TYPE_CHECKING:
    from pathlib import Path


class _SchemaModel(Protocol):
    schema_version: int

    @classmethod
    def model_validate(cls, obj: Any) -> _SchemaModel: ...


_JSONL_MODELS: dict[str, type[_SchemaModel]] = {
    "bindings": BindingRecord,
    "diagnostics": DiagnosticRecord,
}


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Check that every contract artifact exists and each record validates.

    A schema version other than the current one is a warning, or an error
    with ``strict_schema_version``.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        _validate_jsonl(
            artifact_name,
            path,
            _JSONL_MODELS[artifact_name],
            result,
            strict_schema_version=strict_schema_version,
        )

    return result


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[_SchemaModel],
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return

    mismatch_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            if record.schema_version != ARTIFACT_SCHEMA_VERSION and not mismatch_emitted:
                message = ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line_number,
                    message=(
                        f"schema_version {record.schema_version} does not match "
                        f"expected {ARTIFACT_SCHEMA_VERSION}."
                    ),
                )
                if strict_schema_version:
                    result.errors.append(message)
                else:
                    result.warnings.append(message)
                mismatch_emitted = True


__all__ = ["ValidationMessage", "ValidationResult", "validate_artifacts"]
