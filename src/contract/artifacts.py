"""Artifact contract definitions.

Filenames, formats, and the schema version of everything ``bindscan generate``
writes. Consumers should depend on these names rather than literals.
"""

from __future__ import annotations

from dataclasses import dataclass

# Schema version stamped on every artifact record.
ARTIFACT_SCHEMA_VERSION = 1

BINDINGS_JSONL = "bindings.jsonl"
DIAGNOSTICS_JSONL = "diagnostics.jsonl"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "bindings": ArtifactSpec(
        filename=BINDINGS_JSONL,
        format="jsonl",
        required_fields_note="BindingRecord fields required by contract.",
    ),
    "diagnostics": ArtifactSpec(
        filename=DIAGNOSTICS_JSONL,
        format="jsonl",
        required_fields_note="DiagnosticRecord fields required by contract.",
    ),
}


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "BINDINGS_JSONL",
    "DIAGNOSTICS_JSONL",
    "ArtifactSpec",
]
