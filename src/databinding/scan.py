"""Top-level entry points for scanning HTML documents for bindings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from databinding.extractors import extract_from_attribute, extract_from_text_node
from databinding.templates import (
    get_all_data_binding_templates,
    is_data_binding_template,
    template_content_children,
)
from markup.traversal import Predicate, is_text_node, node_walk_all

if TYPE_CHECKING:
    from markup.document import HtmlNode, ParsedHtmlDocument
    from model.diagnostics import Diagnostic
    from model.expressions import BindingExpression


@dataclass
class ScanResult:
    """Expressions and warnings in document order."""

    expressions: list[BindingExpression] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)


def scan_document(
    document: ParsedHtmlDocument, predicate: Predicate = is_data_binding_template
) -> ScanResult:
    """Find and parse the data-binding expressions in an HTML document."""
    return _extract_from_templates(
        document, get_all_data_binding_templates(document.ast, predicate), predicate
    )


def scan_template(
    document: ParsedHtmlDocument,
    template: HtmlNode,
    predicate: Predicate = is_data_binding_template,
) -> ScanResult:
    """Scan one known template and the data-binding templates nested in it."""
    templates = [template]
    if template.content is not None:
        templates.extend(get_all_data_binding_templates(template.content, predicate))
    return _extract_from_templates(document, templates, predicate)


def _extract_from_templates(
    document: ParsedHtmlDocument,
    templates: Iterable[HtmlNode],
    predicate: Predicate,
) -> ScanResult:
    result = ScanResult()
    get_child_nodes = template_content_children(predicate)

    def visit(node: HtmlNode) -> None:
        if is_text_node(node) and node.value:
            extract_from_text_node(document, node, result.expressions, result.warnings)
        for attribute in node.attrs:
            extract_from_attribute(
                document, node, attribute, result.expressions, result.warnings
            )

    for template in templates:
        if template.content is None:
            continue
        node_walk_all(template.content, visit, get_child_nodes)
    return result


__all__ = ["ScanResult", "scan_document", "scan_template"]
