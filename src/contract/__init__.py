"""Stable artifact contract surface for bindscan.

Treat these exports as the authoritative description of generated artifacts.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    BINDINGS_JSONL,
    DIAGNOSTICS_JSONL,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"BindingRecord", "DiagnosticRecord"}:
        from contract.models import BindingRecord, DiagnosticRecord

        return {
            "BindingRecord": BindingRecord,
            "DiagnosticRecord": DiagnosticRecord,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "BINDINGS_JSONL",
    "DIAGNOSTICS_JSONL",
    "ArtifactSpec",
    "BindingRecord",
    "DiagnosticRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
