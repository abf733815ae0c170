from __future__ import annotations

from databinding.extractors import extract_from_attribute, extract_from_text_node
from markup.document import HtmlNode, ParsedHtmlDocument, parse_html
from markup.traversal import has_tag_name, is_text_node, query_all
from model.diagnostics import Diagnostic, DiagnosticCode
from model.expressions import AttributeSite, BindingExpression, TextNodeSite
from model.source import SourcePosition


def _element(html: str, tag: str) -> tuple[ParsedHtmlDocument, HtmlNode]:
    document = parse_html(html, "el.html")
    (node,) = query_all(document.ast, has_tag_name(tag))
    return document, node


def _text_child(node: HtmlNode) -> HtmlNode:
    (text,) = [child for child in node.child_nodes if is_text_node(child)]
    return text


def _from_attribute(
    html: str, tag: str, name: str
) -> tuple[list[BindingExpression], list[Diagnostic]]:
    document, node = _element(html, tag)
    (attribute,) = [a for a in node.attrs if a.name == name]
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []
    extract_from_attribute(document, node, attribute, results, warnings)
    return results, warnings


def test_text_node_expressions() -> None:
    document, span = _element("<span>Hi {{first}} [[last.name]]!</span>", "span")
    text = _text_child(span)
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []

    extract_from_text_node(document, text, results, warnings)

    assert warnings == []
    assert [(e.expression_text, e.direction) for e in results] == [
        ("first", "{"),
        ("last.name", "["),
    ]
    first, last = results
    assert isinstance(first.site, TextNodeSite)
    assert first.site.node is text
    assert first.kind == "text-node"
    assert first.source_range.start == SourcePosition(line=0, column=11)
    assert first.source_range.end == SourcePosition(line=0, column=16)
    assert last.property_names == ["last"]
    assert last.properties[0].source_range.start == SourcePosition(line=0, column=21)


def test_text_node_later_lines_do_not_take_start_column() -> None:
    document, span = _element("<span>x\n    {{foo}}</span>", "span")
    results: list[BindingExpression] = []

    extract_from_text_node(document, _text_child(span), results, [])

    (expression,) = results
    assert expression.source_range.start == SourcePosition(line=1, column=6)
    assert expression.properties[0].source_range.end == SourcePosition(
        line=1, column=9
    )


def test_text_node_invalid_expression_is_reported_and_kept() -> None:
    document, span = _element("<span>{{a + b}}</span>", "span")
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []

    extract_from_text_node(document, _text_child(span), results, warnings)

    (expression,) = results
    assert [w.code for w in warnings] == [DiagnosticCode.INVALID_EXPRESSION]
    assert list(expression.warnings) == warnings


def test_text_node_parse_error_drops_expression() -> None:
    document, span = _element("<span>{{foo(}} {{bar}}</span>", "span")
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []

    extract_from_text_node(document, _text_child(span), results, warnings)

    assert [e.expression_text for e in results] == ["bar"]
    (warning,) = warnings
    assert warning.code is DiagnosticCode.PARSE_ERROR
    assert warning.source_range.start.line == 0
    assert warning.source_range.start.column >= 8


def test_path_segments_are_skipped_silently() -> None:
    document, span = _element("<span>{{foo.0}} {{bar.*}} {{baz}}</span>", "span")
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []

    extract_from_text_node(document, _text_child(span), results, warnings)

    assert [e.expression_text for e in results] == ["baz"]
    assert warnings == []


def test_complete_attribute_binding() -> None:
    results, warnings = _from_attribute(
        '<my-el items="{{list}}"></my-el>', "my-el", "items"
    )

    assert warnings == []
    (expression,) = results
    assert isinstance(expression.site, AttributeSite)
    assert expression.site.attribute_name == "items"
    assert expression.site.is_complete_binding is True
    assert expression.site.event_name is None
    assert expression.source_range.start == SourcePosition(line=0, column=16)
    assert expression.source_range.end == SourcePosition(line=0, column=20)


def test_interpolated_attribute_binding() -> None:
    results, _ = _from_attribute(
        '<div class$="card [[kind]] {{size}}"></div>', "div", "class$"
    )

    assert [(e.expression_text, e.site.is_complete_binding) for e in results] == [
        ("kind", False),
        ("size", False),
    ]


def test_two_way_event_name() -> None:
    results, _ = _from_attribute(
        '<input value="{{value::input}}">', "input", "value"
    )

    (expression,) = results
    assert expression.expression_text == "value"
    assert expression.site.event_name == "input"
    assert expression.site.is_complete_binding is True
    assert expression.property_names == ["value"]


def test_event_name_with_member_path() -> None:
    results, _ = _from_attribute(
        '<x-form data="{{user.name::name-changed}}"></x-form>', "x-form", "data"
    )

    (expression,) = results
    assert expression.expression_text == "user.name"
    assert expression.site.event_name == "name-changed"
    assert expression.property_names == ["user"]


def test_one_way_binding_keeps_event_syntax() -> None:
    results, warnings = _from_attribute(
        '<input value="[[value::input]]">', "input", "value"
    )

    assert results == []
    assert [w.code for w in warnings] == [DiagnosticCode.PARSE_ERROR]


def test_attribute_on_later_line() -> None:
    results, _ = _from_attribute(
        '<div\n   title="x {{y}}"></div>', "div", "title"
    )

    (expression,) = results
    assert expression.source_range.start == SourcePosition(line=1, column=14)


def test_attribute_without_bindings() -> None:
    results, warnings = _from_attribute('<div title="plain"></div>', "div", "title")

    assert results == []
    assert warnings == []


def test_text_node_deep_in_document() -> None:
    document, bold = _element("\n" * 10 + "    <b>line1\n{{foo}}</b>", "b")
    text = _text_child(bold)
    results: list[BindingExpression] = []

    extract_from_text_node(document, text, results, [])

    assert document.source_range_for_node(text).start == SourcePosition(
        line=10, column=7
    )
    (expression,) = results
    assert expression.source_range.start == SourcePosition(line=11, column=2)


def test_entities_in_binding_bodies_are_decoded() -> None:
    html = (
        '<p title="{{label(&quot;hi&quot;)}}">{{label(&quot;hi&quot;)}}</p>'
    )
    document, paragraph = _element(html, "p")
    (attribute,) = paragraph.attrs
    results: list[BindingExpression] = []
    warnings: list[Diagnostic] = []

    extract_from_attribute(document, paragraph, attribute, results, warnings)
    extract_from_text_node(document, _text_child(paragraph), results, warnings)

    assert warnings == []
    assert [e.expression_text for e in results] == ['label("hi")', 'label("hi")']
    assert [e.property_names for e in results] == [["label"], ["label"]]
    # Outer ranges still cover the raw, encoded source.
    assert results[1].source_range.start == SourcePosition(line=0, column=39)
    assert results[1].source_range.end == SourcePosition(line=0, column=60)


def test_encoded_operator_is_still_rejected() -> None:
    document, paragraph = _element("<p>{{a &lt; b}}</p>", "p")
    warnings: list[Diagnostic] = []

    extract_from_text_node(document, _text_child(paragraph), [], warnings)

    (warning,) = warnings
    assert warning.code is DiagnosticCode.INVALID_EXPRESSION
    assert warning.message.endswith("binary_expression not expected here.")


def test_event_split_spans_lines() -> None:
    results, warnings = _from_attribute(
        '<input value="{{a.\nb::c}}">', "input", "value"
    )

    assert warnings == []
    (expression,) = results
    assert isinstance(expression.site, AttributeSite)
    assert expression.site.event_name == "c"
    assert expression.expression_text == "a.\nb"
    assert expression.property_names == ["a"]
