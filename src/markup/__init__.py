"""HTML document model and traversal helpers."""

from markup.document import (
    COMMENT,
    DOCUMENT,
    DOCUMENT_FRAGMENT,
    TEXT,
    HtmlAttribute,
    HtmlNode,
    ParsedHtmlDocument,
    parse_html,
)
from markup.traversal import (
    AND,
    OR,
    Predicate,
    child_nodes,
    child_nodes_include_template,
    has_attr_value,
    has_tag_name,
    is_text_node,
    node_walk_all,
    parent_matches,
    query_all,
)

__all__ = [
    "AND",
    "COMMENT",
    "DOCUMENT",
    "DOCUMENT_FRAGMENT",
    "OR",
    "TEXT",
    "HtmlAttribute",
    "HtmlNode",
    "ParsedHtmlDocument",
    "Predicate",
    "child_nodes",
    "child_nodes_include_template",
    "has_attr_value",
    "has_tag_name",
    "is_text_node",
    "node_walk_all",
    "parent_matches",
    "query_all",
]
