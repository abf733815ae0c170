"""Artifact generators for bindscan."""

from artifacts.generators.bindings import (
    BindingsGenerator,
    FileScan,
    binding_record,
    diagnostic_record,
    scan_repository,
)

__all__ = [
    "BindingsGenerator",
    "FileScan",
    "binding_record",
    "diagnostic_record",
    "scan_repository",
]
