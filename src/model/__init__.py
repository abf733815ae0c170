"""Model namespace for data-binding scan records.

Expression records reference HTML and JavaScript nodes, so they are loaded
lazily to keep ``model.source`` importable from the parsers.
"""

from model.diagnostics import Diagnostic, DiagnosticCode, Severity
from model.source import (
    LocationOffset,
    SourcePosition,
    SourceRange,
    correct_position,
    correct_source_range,
)

_EXPRESSION_EXPORTS = frozenset(
    {
        "AttributeSite",
        "BindingDirection",
        "BindingExpression",
        "BindingSite",
        "JsLiteralSite",
        "PropertyReference",
        "TextNodeSite",
    }
)


def __getattr__(name: str) -> object:
    if name in _EXPRESSION_EXPORTS:
        from model import expressions

        return getattr(expressions, name)

    msg = f"module 'model' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "AttributeSite",
    "BindingDirection",
    "BindingExpression",
    "BindingSite",
    "Diagnostic",
    "DiagnosticCode",
    "JsLiteralSite",
    "LocationOffset",
    "PropertyReference",
    "Severity",
    "SourcePosition",
    "SourceRange",
    "TextNodeSite",
    "correct_position",
    "correct_source_range",
]
