"""Extraction of binding expressions from text nodes, attributes, and literals."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from databinding.ranges import find_newline_indexes, indexes_to_source_range
from databinding.scanner import find_bindings
from databinding.validator import extract_properties_and_validate
from javascript.parser import NodeKind, ParseFailure, node_kind, parse_js
from model.diagnostics import Diagnostic, DiagnosticCode, Severity
from model.expressions import (
    AttributeSite,
    BindingExpression,
    BindingSite,
    JsLiteralSite,
    TextNodeSite,
)
from model.source import (
    LocationOffset,
    SourcePosition,
    SourceRange,
    correct_source_range,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from javascript.document import JavaScriptDocument
    from javascript.parser import JsProgram, ParseResult
    from markup.document import HtmlAttribute, HtmlNode, ParsedHtmlDocument

logger = logging.getLogger(__name__)

# Sub-property (foo.*) and array index (foo.0) paths are valid in bindings
# but are not JavaScript.
_PATH_SEGMENT = re.compile(r"\.(\*|\d+)")
# Greedy across lines: splits at the last "::" of the whole body.
_EVENT_NAME = re.compile(r"(.*)::(.*)", re.DOTALL)


@dataclass(frozen=True)
class JsLiteralResult:
    expression: BindingExpression | None = None
    warnings: list[Diagnostic] = field(default_factory=list)


def parse_expression(
    content: str, expression_range: SourceRange
) -> ParseResult | None:
    """Parse one binding body positioned at ``expression_range``.

    Returns None, without a diagnostic, for bodies that fail to parse only
    because they use the ``.*`` / ``.0`` path syntax.
    """
    result = parse_js(
        content,
        expression_range.file,
        LocationOffset.of(expression_range),
        DiagnosticCode.PARSE_ERROR,
    )
    if isinstance(result, ParseFailure) and _PATH_SEGMENT.search(content):
        logger.debug("Skipping path-style binding %r", content)
        return None
    return result


def _build_expression(
    site: BindingSite,
    source_range: SourceRange,
    expression_text: str,
    program: JsProgram,
) -> BindingExpression:
    properties, warnings = extract_properties_and_validate(program, source_range)
    return BindingExpression(
        source_range=source_range,
        expression_text=expression_text,
        site=site,
        properties=tuple(properties),
        warnings=tuple(warnings),
    )


def extract_from_text_node(
    document: ParsedHtmlDocument,
    node: HtmlNode,
    results: list[BindingExpression],
    warnings: list[Diagnostic],
) -> None:
    """Append the expressions and warnings found in a text node."""
    text = node.value or ""
    bindings = find_bindings(text)
    if not bindings:
        return

    newline_indexes = find_newline_indexes(text)
    node_range = document.source_range_for_node(node)
    start_of_text = LocationOffset.of(node_range)

    for binding in bindings:
        within_text = indexes_to_source_range(
            binding.start_index, binding.end_index, node_range.file, newline_indexes
        )
        source_range = correct_source_range(within_text, start_of_text)

        # The value is raw source; bodies are parsed with entities decoded.
        expression_text = html.unescape(binding.expression_text)
        result = parse_expression(expression_text, source_range)
        if result is None:
            continue
        if isinstance(result, ParseFailure):
            warnings.append(result.warning)
            continue

        expression = _build_expression(
            TextNodeSite(direction=binding.direction, node=node),
            source_range,
            expression_text,
            result.program,
        )
        warnings.extend(expression.warnings)
        results.append(expression)


def extract_from_attribute(
    document: ParsedHtmlDocument,
    node: HtmlNode,
    attribute: HtmlAttribute,
    results: list[BindingExpression],
    warnings: list[Diagnostic],
) -> None:
    """Append the expressions and warnings found in one attribute value."""
    value = attribute.value
    if not value:
        return

    bindings = find_bindings(value)
    if not bindings:
        return

    value_range = document.source_range_for_attribute_value(
        node, attribute.name, exclude_quotes=True
    )
    if value_range is None:
        return
    value_offset = LocationOffset.of(value_range)
    newline_indexes = find_newline_indexes(value)

    for binding in bindings:
        is_complete_binding = (
            binding.start_index == 2 and binding.end_index + 2 == len(value)
        )
        expression_text = binding.expression_text
        event_name = None
        if binding.direction == "{":
            match = _EVENT_NAME.fullmatch(expression_text)
            if match:
                expression_text, event_name = match.group(1), match.group(2)
        expression_text = html.unescape(expression_text)
        if event_name is not None:
            event_name = html.unescape(event_name)

        within_value = indexes_to_source_range(
            binding.start_index, binding.end_index, value_range.file, newline_indexes
        )
        source_range = correct_source_range(within_value, value_offset)

        result = parse_expression(expression_text, source_range)
        if result is None:
            continue
        if isinstance(result, ParseFailure):
            warnings.append(result.warning)
            continue

        site = AttributeSite(
            direction=binding.direction,
            attribute_name=attribute.name,
            is_complete_binding=is_complete_binding,
            event_name=event_name,
            node=node,
            attribute=attribute,
        )
        expression = _build_expression(
            site, source_range, expression_text, result.program
        )
        warnings.extend(expression.warnings)
        results.append(expression)


def extract_from_js_literal(
    document: JavaScriptDocument, node: Node
) -> JsLiteralResult:
    """Parse a binding expression written as a JavaScript string literal.

    A non-literal node is reported as INFO: it may well be valid, it just
    cannot be analyzed statically. A literal that is not a string is a
    WARNING.
    """
    warnings: list[Diagnostic] = []
    literal_range = document.source_range_for_node(node)

    if node_kind(node) is not NodeKind.LITERAL:
        warnings.append(
            Diagnostic(
                code=DiagnosticCode.UNANALYZABLE_EXPRESSION,
                message="Can only analyze databinding expressions in string literals.",
                source_range=literal_range,
                severity=Severity.INFO,
            )
        )
        return JsLiteralResult(warnings=warnings)

    value_type = document.literal_typeof(node)
    if value_type != "string":
        warnings.append(
            Diagnostic(
                code=DiagnosticCode.INVALID_EXPRESSION,
                message=f"Expected a string, got a {value_type}.",
                source_range=literal_range,
                severity=Severity.WARNING,
            )
        )
        return JsLiteralResult(warnings=warnings)

    expression_text = document.string_value(node)
    # Skip the quote characters.
    source_range = SourceRange(
        file=literal_range.file,
        start=SourcePosition(
            line=literal_range.start.line, column=literal_range.start.column + 1
        ),
        end=SourcePosition(
            line=literal_range.end.line, column=literal_range.end.column - 1
        ),
    )

    result = parse_expression(expression_text, source_range)
    if result is None:
        return JsLiteralResult(warnings=warnings)
    if isinstance(result, ParseFailure):
        warnings.append(result.warning)
        return JsLiteralResult(warnings=warnings)

    expression = _build_expression(
        JsLiteralSite(node=node), source_range, expression_text, result.program
    )
    warnings.extend(expression.warnings)
    return JsLiteralResult(expression=expression, warnings=warnings)


__all__ = [
    "JsLiteralResult",
    "extract_from_attribute",
    "extract_from_js_literal",
    "extract_from_text_node",
    "parse_expression",
]
