"""Tree-sitter backed HTML document model.

The tree mirrors the shape data-binding analysis expects from an HTML parser:
element nodes with ordered attributes, raw text nodes between tags, and
``<template>`` children moved into a separate ``#document-fragment`` held in
``HtmlNode.content`` rather than the template's own child list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_html import language as get_html_language

from model.source import SourcePosition, SourceRange
from utils import SourceText

if TYPE_CHECKING:
    from collections.abc import Iterator

_PARSER: Parser | None = None

DOCUMENT = "#document"
DOCUMENT_FRAGMENT = "#document-fragment"
TEXT = "#text"
COMMENT = "#comment"

_ELEMENT_TYPES = frozenset({"element", "script_element", "style_element"})
_TAG_TYPES = frozenset({"start_tag", "self_closing_tag"})
# Nodes that occupy source without producing a child of their own.
_OPAQUE_TYPES = frozenset({"doctype", "erroneous_end_tag"})


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with HTML language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_html_language())
        _PARSER = Parser(lang)

    return _PARSER


class HtmlAttribute:
    """An attribute as written in a start tag.

    Byte offsets locate the value within the document; ``value_start`` and
    ``value_end`` exclude quotes, ``quoted_start`` and ``quoted_end`` include
    them. All four are None for a valueless attribute.
    """

    __slots__ = (
        "end_byte",
        "name",
        "quoted_end",
        "quoted_start",
        "start_byte",
        "value",
        "value_end",
        "value_start",
    )

    def __init__(
        self,
        name: str,
        value: str,
        *,
        start_byte: int,
        end_byte: int,
        value_start: int | None = None,
        value_end: int | None = None,
        quoted_start: int | None = None,
        quoted_end: int | None = None,
    ) -> None:
        self.name = name
        self.value = value
        self.start_byte = start_byte
        self.end_byte = end_byte
        self.value_start = value_start
        self.value_end = value_end
        self.quoted_start = quoted_start
        self.quoted_end = quoted_end

    def __repr__(self) -> str:
        return f"HtmlAttribute({self.name!r}, {self.value!r})"


class HtmlNode:
    """A node of the parsed HTML tree. Compared by identity."""

    __slots__ = (
        "attrs",
        "child_nodes",
        "content",
        "end_byte",
        "node_name",
        "parent",
        "start_byte",
        "tag_name",
        "value",
    )

    def __init__(
        self,
        node_name: str,
        *,
        start_byte: int,
        end_byte: int,
        tag_name: str | None = None,
        value: str | None = None,
        parent: HtmlNode | None = None,
    ) -> None:
        self.node_name = node_name
        self.tag_name = tag_name
        self.value = value
        self.parent = parent
        self.start_byte = start_byte
        self.end_byte = end_byte
        self.attrs: list[HtmlAttribute] = []
        self.child_nodes: list[HtmlNode] = []
        self.content: HtmlNode | None = None

    @property
    def is_element(self) -> bool:
        return self.tag_name is not None

    def get_attribute(self, name: str) -> str | None:
        for attr in self.attrs:
            if attr.name == name:
                return attr.value
        return None

    def __repr__(self) -> str:
        if self.tag_name is not None:
            return f"<HtmlNode {self.tag_name}>"
        if self.value is not None:
            return f"<HtmlNode {self.node_name} {self.value[:20]!r}>"
        return f"<HtmlNode {self.node_name}>"


class ParsedHtmlDocument:
    """A parsed HTML file with source-range lookups for its nodes."""

    def __init__(self, url: str, contents: str, ast: HtmlNode, source: SourceText):
        self.url = url
        self.contents = contents
        self.ast = ast
        self._source = source

    def _range(self, start_byte: int, end_byte: int) -> SourceRange:
        start_line, start_col = self._source.byte_position(start_byte)
        end_line, end_col = self._source.byte_position(end_byte)
        return SourceRange(
            file=self.url,
            start=SourcePosition(line=start_line, column=start_col),
            end=SourcePosition(line=end_line, column=end_col),
        )

    def source_range_for_node(self, node: HtmlNode) -> SourceRange:
        return self._range(node.start_byte, node.end_byte)

    def source_range_for_attribute_value(
        self, node: HtmlNode, attr_name: str, exclude_quotes: bool = False
    ) -> SourceRange | None:
        """Absolute range of an attribute's value.

        With ``exclude_quotes`` the range starts at the first character of the
        value itself, which is where offsets into ``HtmlAttribute.value`` are
        measured from.
        """
        for attr in node.attrs:
            if attr.name != attr_name:
                continue
            if exclude_quotes:
                if attr.value_start is None or attr.value_end is None:
                    return None
                return self._range(attr.value_start, attr.value_end)
            if attr.quoted_start is None or attr.quoted_end is None:
                return None
            return self._range(attr.quoted_start, attr.quoted_end)
        return None


def _tag_name(tag: Node, source: SourceText) -> str:
    for child in tag.children:
        if child.type == "tag_name":
            return source.slice_bytes(child.start_byte, child.end_byte).lower()
    return ""


def _build_attribute(attr_node: Node, source: SourceText) -> HtmlAttribute | None:
    name: str | None = None
    value_node: Node | None = None
    quoted_node: Node | None = None
    for child in attr_node.children:
        if child.type == "attribute_name":
            name = source.slice_bytes(child.start_byte, child.end_byte).lower()
        elif child.type == "quoted_attribute_value":
            quoted_node = child
        elif child.type == "attribute_value":
            value_node = child

    if name is None:
        return None

    attribute = HtmlAttribute(
        name, "", start_byte=attr_node.start_byte, end_byte=attr_node.end_byte
    )
    if quoted_node is not None:
        # An empty quoted value has no attribute_value child.
        attribute.quoted_start = quoted_node.start_byte
        attribute.quoted_end = quoted_node.end_byte
        attribute.value_start = quoted_node.start_byte + 1
        attribute.value_end = max(quoted_node.end_byte - 1, attribute.value_start)
    elif value_node is not None:
        attribute.quoted_start = attribute.value_start = value_node.start_byte
        attribute.quoted_end = attribute.value_end = value_node.end_byte

    if attribute.value_start is not None and attribute.value_end is not None:
        attribute.value = source.slice_bytes(
            attribute.value_start, attribute.value_end
        )
    return attribute


def _append_text(
    parent: HtmlNode, start_byte: int, end_byte: int, source: SourceText
) -> None:
    if end_byte <= start_byte:
        return
    parent.child_nodes.append(
        HtmlNode(
            TEXT,
            start_byte=start_byte,
            end_byte=end_byte,
            value=source.slice_bytes(start_byte, end_byte),
            parent=parent,
        )
    )


def _flatten_errors(ts_children: list[Node]) -> Iterator[Node]:
    for child in ts_children:
        if child.type == "ERROR":
            yield from _flatten_errors(child.children)
        else:
            yield child


def _build_children(
    parent: HtmlNode,
    ts_children: list[Node],
    start_byte: int,
    end_byte: int,
    source: SourceText,
) -> None:
    """Populate ``parent`` from the tree-sitter nodes between two offsets.

    Text nodes are cut from the raw source between structural siblings, so
    whitespace and undecoded entities are kept and offsets stay exact.
    """
    cursor = start_byte
    for child in _flatten_errors(ts_children):
        if child.type in _ELEMENT_TYPES:
            _append_text(parent, cursor, child.start_byte, source)
            parent.child_nodes.append(_build_element(child, parent, source))
            cursor = child.end_byte
        elif child.type == "comment":
            _append_text(parent, cursor, child.start_byte, source)
            parent.child_nodes.append(
                HtmlNode(
                    COMMENT,
                    start_byte=child.start_byte,
                    end_byte=child.end_byte,
                    value=source.slice_bytes(child.start_byte, child.end_byte),
                    parent=parent,
                )
            )
            cursor = child.end_byte
        elif child.type in _OPAQUE_TYPES:
            _append_text(parent, cursor, child.start_byte, source)
            cursor = child.end_byte
    _append_text(parent, cursor, end_byte, source)


def _build_element(ts_node: Node, parent: HtmlNode, source: SourceText) -> HtmlNode:
    children = ts_node.children
    start_tag = children[0] if children and children[0].type in _TAG_TYPES else None
    end_tag = children[-1] if children and children[-1].type == "end_tag" else None

    tag_name = _tag_name(start_tag, source) if start_tag is not None else ""
    element = HtmlNode(
        tag_name,
        start_byte=ts_node.start_byte,
        end_byte=ts_node.end_byte,
        tag_name=tag_name,
        parent=parent,
    )

    if start_tag is not None:
        for child in start_tag.children:
            if child.type == "attribute":
                attribute = _build_attribute(child, source)
                if attribute is not None:
                    element.attrs.append(attribute)

    if start_tag is None or start_tag.type == "self_closing_tag":
        return element

    inner = children[1:-1] if end_tag is not None else children[1:]
    inner_end = end_tag.start_byte if end_tag is not None else ts_node.end_byte

    container = element
    if element.tag_name == "template":
        container = HtmlNode(
            DOCUMENT_FRAGMENT,
            start_byte=start_tag.end_byte,
            end_byte=inner_end,
            parent=None,
        )
        element.content = container

    _build_children(container, inner, start_tag.end_byte, inner_end, source)
    return element


def parse_html(contents: str, url: str = "") -> ParsedHtmlDocument:
    """Parse HTML source into a ParsedHtmlDocument.

    Args:
        contents: HTML source text
        url: File name recorded on every source range

    Returns:
        ParsedHtmlDocument whose ``ast`` is the ``#document`` root node.
    """
    parser = _get_parser()
    source = SourceText(contents)
    tree = parser.parse(source.data)
    root_node = tree.root_node

    root = HtmlNode(DOCUMENT, start_byte=0, end_byte=len(source.data))
    _build_children(root, root_node.children, 0, len(source.data), source)
    return ParsedHtmlDocument(url, contents, root, source)


__all__ = [
    "COMMENT",
    "DOCUMENT",
    "DOCUMENT_FRAGMENT",
    "TEXT",
    "HtmlAttribute",
    "HtmlNode",
    "ParsedHtmlDocument",
    "parse_html",
]
