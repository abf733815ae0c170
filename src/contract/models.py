"""Artifact record models exposed at the contract boundary."""

from artifacts.models import BindingRecord, DiagnosticRecord

__all__ = ["BindingRecord", "DiagnosticRecord"]
