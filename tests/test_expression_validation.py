from __future__ import annotations

import pytest

from databinding.validator import extract_properties_and_validate
from javascript.parser import ParseFailure, ParseSuccess, parse_js
from model.diagnostics import DiagnosticCode, Severity
from model.source import LocationOffset, SourcePosition, SourceRange


def _expression_range(text: str, line: int = 0, column: int = 0) -> SourceRange:
    return SourceRange(
        file="el.html",
        start=SourcePosition(line=line, column=column),
        end=SourcePosition(line=line, column=column + len(text)),
    )


def _validate(text: str, line: int = 0, column: int = 0):
    result = parse_js(text, "el.html")
    assert isinstance(result, ParseSuccess)
    return extract_properties_and_validate(
        result.program, _expression_range(text, line, column)
    )


@pytest.mark.parametrize(
    ("text", "names"),
    [
        ("foo", ["foo"]),
        ("foo.bar.baz", ["foo"]),
        ("foo[0]", ["foo"]),
        ("!hidden", ["hidden"]),
        ("(foo)", ["foo"]),
        ("foo(bar, baz.zod)", ["foo", "bar", "baz"]),
        ("compute(a, 'literal', 3, true)", ["compute", "a"]),
        ("42", []),
        ("undefined", ["undefined"]),
    ],
)
def test_accepted_expressions(text: str, names: list[str]) -> None:
    properties, warnings = _validate(text)

    assert warnings == []
    assert [prop.name for prop in properties] == names


def test_property_ranges_are_absolute() -> None:
    properties, _ = _validate("foo(bar, baz.zod)", line=4, column=10)

    assert [(p.source_range.start, p.source_range.end) for p in properties] == [
        (SourcePosition(line=4, column=10), SourcePosition(line=4, column=13)),
        (SourcePosition(line=4, column=14), SourcePosition(line=4, column=17)),
        (SourcePosition(line=4, column=19), SourcePosition(line=4, column=22)),
    ]
    assert {p.source_range.file for p in properties} == {"el.html"}


def test_binary_operator_rejected() -> None:
    properties, warnings = _validate("a && b", column=5)

    assert properties == []
    (warning,) = warnings
    assert warning.code is DiagnosticCode.INVALID_EXPRESSION
    assert warning.severity is Severity.WARNING
    assert warning.message == (
        "Only simple syntax is supported in data-binding expressions. "
        "binary_expression not expected here."
    )
    assert warning.source_range.start == SourcePosition(line=0, column=5)
    assert warning.source_range.end == SourcePosition(line=0, column=11)


@pytest.mark.parametrize("text", ["-x", "typeof x", "~x"])
def test_only_logical_not_is_supported(text: str) -> None:
    properties, warnings = _validate(text)

    assert properties == []
    assert [w.message for w in warnings] == [
        "Only the logical not (!) operator is supported."
    ]


def test_multiple_statements_rejected() -> None:
    properties, warnings = _validate("a; b")

    assert properties == []
    assert [w.message for w in warnings] == ["Expected one expression, got 2"]


def test_statement_rejected() -> None:
    _, warnings = _validate("if (a) b")

    assert [w.message for w in warnings] == [
        "Expect an expression, not a if_statement"
    ]


def test_nested_call_rejected_but_siblings_validated() -> None:
    properties, warnings = _validate("outer(inner(x), y)")

    assert [p.name for p in properties] == ["outer", "y"]
    (warning,) = warnings
    assert warning.message.endswith("call_expression not expected here.")


def test_method_call_on_member_collects_root() -> None:
    properties, warnings = _validate("item.format(value)")

    assert warnings == []
    assert [p.name for p in properties] == ["item", "value"]


def test_parse_failure_is_shifted_by_offset() -> None:
    result = parse_js("foo(", "el.html", LocationOffset(line=2, col=8))

    assert isinstance(result, ParseFailure)
    warning = result.warning
    assert warning.code is DiagnosticCode.PARSE_ERROR
    assert warning.severity is Severity.WARNING
    assert warning.source_range.file == "el.html"
    assert warning.source_range.start.line == 2
    assert warning.source_range.start.column >= 8
