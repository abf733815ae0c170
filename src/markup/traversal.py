"""Predicates and tree walking over HtmlNode trees."""

from __future__ import annotations

from collections.abc import Callable

from markup.document import TEXT, HtmlNode

Predicate = Callable[[HtmlNode], bool]
GetChildNodes = Callable[[HtmlNode], list[HtmlNode]]


def has_tag_name(name: str) -> Predicate:
    lowered = name.lower()

    def predicate(node: HtmlNode) -> bool:
        return node.tag_name == lowered

    return predicate


def has_attr_value(name: str, value: str) -> Predicate:
    def predicate(node: HtmlNode) -> bool:
        return node.get_attribute(name) == value

    return predicate


def parent_matches(matcher: Predicate) -> Predicate:
    """Match nodes whose direct parent matches ``matcher``."""

    def predicate(node: HtmlNode) -> bool:
        return node.parent is not None and matcher(node.parent)

    return predicate


def AND(*predicates: Predicate) -> Predicate:  # noqa: N802
    def predicate(node: HtmlNode) -> bool:
        return all(p(node) for p in predicates)

    return predicate


def OR(*predicates: Predicate) -> Predicate:  # noqa: N802
    def predicate(node: HtmlNode) -> bool:
        return any(p(node) for p in predicates)

    return predicate


def is_text_node(node: HtmlNode) -> bool:
    return node.node_name == TEXT


def child_nodes(node: HtmlNode) -> list[HtmlNode]:
    return node.child_nodes


def child_nodes_include_template(node: HtmlNode) -> list[HtmlNode]:
    """Children of ``node``, followed by its template content if it has one."""
    if node.content is not None:
        return [*node.child_nodes, node.content]
    return node.child_nodes


def node_walk_all(
    node: HtmlNode,
    visit: Callable[[HtmlNode], None],
    get_child_nodes: GetChildNodes = child_nodes,
) -> None:
    """Visit ``node`` and its descendants in document (pre-)order."""
    stack = [node]
    while stack:
        current = stack.pop()
        visit(current)
        stack.extend(reversed(get_child_nodes(current)))


def query_all(
    node: HtmlNode,
    predicate: Predicate,
    get_child_nodes: GetChildNodes = child_nodes,
) -> list[HtmlNode]:
    """Return ``node`` and every descendant matching ``predicate``, in order."""
    matches: list[HtmlNode] = []

    def visit(current: HtmlNode) -> None:
        if predicate(current):
            matches.append(current)

    node_walk_all(node, visit, get_child_nodes)
    return matches


__all__ = [
    "AND",
    "OR",
    "GetChildNodes",
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
