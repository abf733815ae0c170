"""Diagnostics reported while scanning data-binding expressions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from model.source import SourceRange


class Severity(str, Enum):
    """Diagnostic severities, most severe first."""

    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.WARNING: 1, Severity.INFO: 0}


class DiagnosticCode(str, Enum):
    INVALID_EXPRESSION = "invalid-binding-expression"
    PARSE_ERROR = "binding-expression-parse-error"
    UNANALYZABLE_EXPRESSION = "unanalyzable-binding-expression"


class Diagnostic(BaseModel):
    """A positioned finding. ``source_range`` is in document coordinates."""

    model_config = ConfigDict(frozen=True)

    code: DiagnosticCode
    message: str
    source_range: SourceRange
    severity: Severity = Severity.WARNING


__all__ = ["Diagnostic", "DiagnosticCode", "Severity"]
