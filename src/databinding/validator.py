"""Restricted-grammar validation of parsed binding expressions.

Only what the runtime binding evaluator can execute is accepted: a single
expression, optionally negated with ``!``, built from literals, identifiers,
member access, and one top-level call whose arguments are themselves plain
values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from javascript.parser import NodeKind, named_children, node_kind, unwrap_parentheses
from model.diagnostics import Diagnostic, DiagnosticCode, Severity
from model.expressions import PropertyReference
from model.source import (
    LocationOffset,
    SourcePosition,
    SourceRange,
    correct_position,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from javascript.parser import JsProgram


class _ExpressionValidator:
    """Walks one program, collecting properties and warnings."""

    def __init__(self, program: JsProgram, source_range: SourceRange) -> None:
        self.program = program
        self.source_range = source_range
        self.offset = LocationOffset.of(source_range)
        self.properties: list[PropertyReference] = []
        self.warnings: list[Diagnostic] = []

    def source_range_for_node(self, node: Node) -> SourceRange:
        location = self.program.location(node)
        # The parser reports 1-indexed lines.
        start = SourcePosition(
            line=location.start_line - 1, column=location.start_column
        )
        end = SourcePosition(line=location.end_line - 1, column=location.end_column)
        return SourceRange(
            file=self.source_range.file,
            start=correct_position(start, self.offset),
            end=correct_position(end, self.offset),
        )

    def warn(self, message: str, node: Node) -> None:
        self.warnings.append(
            Diagnostic(
                code=DiagnosticCode.INVALID_EXPRESSION,
                message=message,
                source_range=self.source_range_for_node(node),
                severity=Severity.WARNING,
            )
        )

    def validate_program(self) -> None:
        body = self.program.body
        if len(body) != 1:
            self.warn(f"Expected one expression, got {len(body)}", self.program.root)
            return

        statement = body[0]
        if statement.type != "expression_statement":
            self.warn(f"Expect an expression, not a {statement.type}", statement)
            return

        children = named_children(statement)
        if len(children) != 1:
            self.warn(
                f"Expected one expression, got {len(children)}",
                statement,
            )
            return

        expression = unwrap_parentheses(children[0])
        if node_kind(expression) is NodeKind.UNARY:
            operator = expression.child_by_field_name("operator")
            argument = expression.child_by_field_name("argument")
            if operator is None or operator.type != "!" or argument is None:
                self.warn("Only the logical not (!) operator is supported.", expression)
                return
            expression = argument

        self.validate_sub_expression(expression, call_allowed=True)

    def validate_sub_expression(self, node: Node, *, call_allowed: bool) -> None:
        node = unwrap_parentheses(node)
        kind = node_kind(node)

        if kind is NodeKind.LITERAL:
            return

        if kind is NodeKind.IDENTIFIER:
            self.properties.append(
                PropertyReference(
                    name=self.program.text(node),
                    source_range=self.source_range_for_node(node),
                )
            )
            return

        if kind is NodeKind.MEMBER:
            obj = node.child_by_field_name("object")
            if obj is not None:
                self.validate_sub_expression(obj, call_allowed=False)
            return

        if kind is NodeKind.CALL and call_allowed:
            callee = node.child_by_field_name("function")
            if callee is not None:
                self.validate_sub_expression(callee, call_allowed=False)
            arguments = node.child_by_field_name("arguments")
            if arguments is not None:
                for argument in named_children(arguments):
                    self.validate_sub_expression(argument, call_allowed=False)
            return

        self.warn(
            "Only simple syntax is supported in data-binding expressions. "
            f"{node.type} not expected here.",
            node,
        )


def extract_properties_and_validate(
    program: JsProgram, source_range: SourceRange
) -> tuple[list[PropertyReference], list[Diagnostic]]:
    """Validate a parsed expression and collect its top-level properties.

    Args:
        program: Parsed expression body
        source_range: Absolute range of the expression body; node positions in
            ``program`` are relative to its start

    Returns:
        (properties, warnings). A rejected node contributes a warning and no
        properties; its siblings, such as other call arguments, are still
        validated.
    """
    validator = _ExpressionValidator(program, source_range)
    validator.validate_program()
    return validator.properties, validator.warnings


__all__ = ["extract_properties_and_validate"]
