"""Parsed JavaScript documents and literal decoding."""

from __future__ import annotations

from tree_sitter import Node

from javascript.parser import _get_parser
from model.source import SourcePosition, SourceRange
from utils import SourceText

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_TERMINATORS = frozenset({"\n", "\r", "\u2028", "\u2029"})

# JavaScript ``typeof`` for each non-string literal node type.
_LITERAL_TYPEOF = {
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "null": "object",
    "regex": "object",
}


class JavaScriptDocument:
    """A parsed JavaScript file with source-range lookups for its nodes."""

    def __init__(self, url: str, contents: str, ast: Node, source: SourceText):
        self.url = url
        self.contents = contents
        self.ast = ast
        self._source = source

    def source_range_for_node(self, node: Node) -> SourceRange:
        start_line, start_col = self._source.byte_position(node.start_byte)
        end_line, end_col = self._source.byte_position(node.end_byte)
        return SourceRange(
            file=self.url,
            start=SourcePosition(line=start_line, column=start_col),
            end=SourcePosition(line=end_line, column=end_col),
        )

    def text(self, node: Node) -> str:
        return self._source.slice_bytes(node.start_byte, node.end_byte)

    def literal_typeof(self, node: Node) -> str | None:
        """JavaScript ``typeof`` of a literal node, or None if not a literal."""
        if node.type == "string":
            return "string"
        return _LITERAL_TYPEOF.get(node.type)

    def string_value(self, node: Node) -> str:
        """Decoded value of a ``string`` literal node."""
        parts: list[str] = []
        for child in node.children:
            if child.type == "string_fragment":
                parts.append(self.text(child))
            elif child.type == "escape_sequence":
                parts.append(decode_escape_sequence(self.text(child)))
        return "".join(parts)


def decode_escape_sequence(sequence: str) -> str:
    """Decode a single JavaScript string escape such as ``\\n`` or ``\\u00e9``.

    >>> decode_escape_sequence("\\\\x41")
    'A'
    """
    body = sequence[1:]
    if not body:
        return ""
    first = body[0]
    if first in _LINE_TERMINATORS:
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    try:
        if first == "x":
            return chr(int(body[1:3], 16))
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        if first == "u":
            return chr(int(body[1:5], 16))
        if first in "01234567":
            return chr(int(body, 8))
    except ValueError:
        return body
    return body


def parse_javascript(contents: str, url: str = "") -> JavaScriptDocument:
    """Parse a JavaScript file.

    Syntax errors do not fail the parse; tree-sitter recovers and the
    resulting tree still locates every well-formed literal.
    """
    parser = _get_parser()
    source = SourceText(contents)
    tree = parser.parse(source.data)
    return JavaScriptDocument(url, contents, tree.root_node, source)


__all__ = ["JavaScriptDocument", "decode_escape_sequence", "parse_javascript"]
