"""Discovery of data-binding templates.

A template is "data-binding" when bindings inside it are evaluated at runtime,
e.g. ``<template is="dom-if">`` or ``<dom-module><template>``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from markup.traversal import (
    AND,
    OR,
    GetChildNodes,
    Predicate,
    child_nodes_include_template,
    has_attr_value,
    has_tag_name,
    parent_matches,
    query_all,
)

if TYPE_CHECKING:
    from markup.document import HtmlNode

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_TYPES = ("dom-bind", "dom-if", "dom-repeat")
DEFAULT_HOST_ELEMENTS = ("dom-bind", "dom-if", "dom-repeat", "dom-module")

is_template = has_tag_name("template")


def data_binding_template_predicate(
    template_types: Iterable[str] = DEFAULT_TEMPLATE_TYPES,
    host_elements: Iterable[str] = DEFAULT_HOST_ELEMENTS,
) -> Predicate:
    """Build the predicate matching data-binding templates.

    Args:
        template_types: Values of the ``is`` attribute that make a
            ``<template>`` data-binding
        host_elements: Tags whose direct ``<template>`` child is data-binding
    """
    return AND(
        is_template,
        OR(
            *(has_attr_value("is", value) for value in template_types),
            parent_matches(OR(*(has_tag_name(tag) for tag in host_elements))),
        ),
    )


is_data_binding_template = data_binding_template_predicate()


def get_all_data_binding_templates(
    node: HtmlNode, predicate: Predicate = is_data_binding_template
) -> list[HtmlNode]:
    """Return all data-binding templates at or below ``node``.

    The query descends into template content, so results include both direct
    and nested templates (e.g. dom-if inside dom-module), in document order.
    """
    templates = query_all(node, predicate, child_nodes_include_template)
    logger.debug("Found %d data-binding templates", len(templates))
    return templates


def template_content_children(
    predicate: Predicate = is_data_binding_template,
) -> GetChildNodes:
    """Child accessor for walking one template's content.

    Content of plain nested templates is walked through. Content of nested
    data-binding templates is not, since those are scanned on their own.
    """

    def get_child_nodes(node: HtmlNode) -> list[HtmlNode]:
        if node.content is not None and not predicate(node):
            return [*node.child_nodes, node.content]
        return node.child_nodes

    return get_child_nodes


__all__ = [
    "DEFAULT_HOST_ELEMENTS",
    "DEFAULT_TEMPLATE_TYPES",
    "data_binding_template_predicate",
    "get_all_data_binding_templates",
    "is_data_binding_template",
    "is_template",
    "template_content_children",
]
