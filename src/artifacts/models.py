"""Artifact record models for bindings.jsonl and diagnostics.jsonl."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION
from model.diagnostics import DiagnosticCode, Severity
from model.source import SourceRange


class PropertyEntry(BaseModel):
    """A top-level property referenced by a binding."""

    name: str
    source_range: SourceRange


class BindingRecord(BaseModel):
    """Schema for bindings.jsonl records."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    path: str
    kind: str
    direction: str | None = None
    expression_text: str
    source_range: SourceRange
    properties: list[PropertyEntry] = Field(default_factory=list)
    attribute_name: str | None = None
    is_complete_binding: bool | None = None
    event_name: str | None = None


class DiagnosticRecord(BaseModel):
    """Schema for diagnostics.jsonl records."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    path: str
    code: DiagnosticCode
    severity: Severity
    message: str
    source_range: SourceRange


__all__ = ["BindingRecord", "DiagnosticRecord", "PropertyEntry"]
