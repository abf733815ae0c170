"""Tree-sitter based JavaScript parsing for binding expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from tree_sitter import Language, Node, Parser
from tree_sitter_javascript import language as get_javascript_language

from model.diagnostics import Diagnostic, DiagnosticCode, Severity
from model.source import (
    LocationOffset,
    SourcePosition,
    SourceRange,
    correct_source_range,
)
from utils import SourceText

_PARSER: Parser | None = None

_LITERAL_TYPES = frozenset({"string", "number", "true", "false", "null", "regex"})
_IDENTIFIER_TYPES = frozenset({"identifier", "undefined"})
_MEMBER_TYPES = frozenset({"member_expression", "subscript_expression"})
_IGNORED_TYPES = frozenset({"comment", "hash_bang_line"})


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with JavaScript language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_javascript_language())
        _PARSER = Parser(lang)

    return _PARSER


class NodeKind(str, Enum):
    """Coarse classification of expression nodes used by validation."""

    LITERAL = "literal"
    IDENTIFIER = "identifier"
    MEMBER = "member"
    CALL = "call"
    UNARY = "unary"
    OTHER = "other"


def named_children(node: Node) -> list[Node]:
    """Named children of ``node`` without comments."""
    return [child for child in node.named_children if child.type not in _IGNORED_TYPES]


def unwrap_parentheses(node: Node) -> Node:
    while node.type == "parenthesized_expression":
        inner = named_children(node)
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def node_kind(node: Node) -> NodeKind:
    node_type = node.type
    if node_type in _LITERAL_TYPES:
        return NodeKind.LITERAL
    if node_type in _IDENTIFIER_TYPES:
        return NodeKind.IDENTIFIER
    if node_type in _MEMBER_TYPES:
        if any(child.type == "optional_chain" for child in node.children):
            return NodeKind.OTHER
        return NodeKind.MEMBER
    if node_type == "call_expression":
        arguments = node.child_by_field_name("arguments")
        # f`...` is a tagged template, not a call.
        if arguments is None or arguments.type != "arguments":
            return NodeKind.OTHER
        return NodeKind.CALL
    if node_type == "unary_expression":
        return NodeKind.UNARY
    return NodeKind.OTHER


@dataclass(frozen=True)
class NodeLocation:
    """Node position with 1-indexed lines and 0-indexed columns."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int


class JsProgram:
    """A parsed JavaScript program and the text it was parsed from."""

    def __init__(self, root: Node, source: SourceText) -> None:
        self.root = root
        self.source = source

    @property
    def body(self) -> list[Node]:
        """Top-level statements."""
        return named_children(self.root)

    def location(self, node: Node) -> NodeLocation:
        start_line, start_col = self.source.byte_position(node.start_byte)
        end_line, end_col = self.source.byte_position(node.end_byte)
        return NodeLocation(
            start_line=start_line + 1,
            start_column=start_col,
            end_line=end_line + 1,
            end_column=end_col,
        )

    def text(self, node: Node) -> str:
        return self.source.slice_bytes(node.start_byte, node.end_byte)


@dataclass(frozen=True)
class ParseSuccess:
    program: JsProgram


@dataclass(frozen=True)
class ParseFailure:
    warning: Diagnostic


ParseResult = Union[ParseSuccess, ParseFailure]


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _error_message(node: Node, source: SourceText) -> str:
    if node.is_missing:
        return f"Missing {node.type}"
    text = source.slice_bytes(node.start_byte, node.end_byte).strip()
    if not text:
        return "Unexpected end of input"
    token = text.split()[0]
    if len(token) > 20:
        token = token[:20] + "..."
    return f"Unexpected token {token}"


def parse_js(
    contents: str,
    filename: str,
    start_offset: LocationOffset | None = None,
    error_code: DiagnosticCode = DiagnosticCode.PARSE_ERROR,
) -> ParseResult:
    """Parse JavaScript source.

    Args:
        contents: Source text to parse
        filename: File recorded on the failure warning's range
        start_offset: Absolute position of ``contents`` within its document;
            failure ranges are shifted by it
        error_code: Code used for the failure warning

    Returns:
        ParseSuccess with the program, or ParseFailure carrying a WARNING
        positioned at the first syntax error.
    """
    parser = _get_parser()
    source = SourceText(contents)
    tree = parser.parse(source.data)
    root_node = tree.root_node

    error_node = _first_error(root_node) if root_node.has_error else None
    if error_node is None:
        return ParseSuccess(JsProgram(root_node, source))

    start_line, start_col = source.byte_position(error_node.start_byte)
    end_line, end_col = source.byte_position(error_node.end_byte)
    relative_range = SourceRange(
        file=filename,
        start=SourcePosition(line=start_line, column=start_col),
        end=SourcePosition(line=end_line, column=end_col),
    )
    return ParseFailure(
        Diagnostic(
            code=error_code,
            message=_error_message(error_node, source),
            source_range=correct_source_range(relative_range, start_offset),
            severity=Severity.WARNING,
        )
    )


__all__ = [
    "JsProgram",
    "NodeKind",
    "NodeLocation",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "named_children",
    "node_kind",
    "parse_js",
    "unwrap_parentheses",
]
