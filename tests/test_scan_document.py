from __future__ import annotations

from databinding.scan import scan_document, scan_template
from databinding.templates import (
    data_binding_template_predicate,
    get_all_data_binding_templates,
)
from markup.document import parse_html
from model.diagnostics import DiagnosticCode

ELEMENT = """\
<dom-module id="my-el">
  <template>
    <div title="[[a]]">{{b}}</div>
    <template is="dom-if" if="[[c]]">
      <span>[[d]]</span>
    </template>
    <template>
      <i>{{inert}}</i>
    </template>
    <p>{{e}}</p>
  </template>
</dom-module>
<p>{{outside}}</p>
"""


def test_scan_document_collects_each_binding_once() -> None:
    document = parse_html(ELEMENT, "my-el.html")

    result = scan_document(document)

    texts = [e.expression_text for e in result.expressions]
    assert sorted(texts) == ["a", "b", "c", "d", "e", "inert"]
    assert result.warnings == []


def test_scan_document_order_follows_templates() -> None:
    document = parse_html(ELEMENT, "my-el.html")

    result = scan_document(document)

    # The outer template (with the nested template's own attributes) comes
    # first, then the nested template's content.
    assert [e.expression_text for e in result.expressions] == [
        "a",
        "b",
        "c",
        "inert",
        "e",
        "d",
    ]


def test_scan_document_is_repeatable() -> None:
    document = parse_html(ELEMENT, "my-el.html")

    first = scan_document(document)
    second = scan_document(document)

    assert [e.model_dump() for e in first.expressions] == [
        e.model_dump() for e in second.expressions
    ]


def test_bindings_outside_templates_are_ignored() -> None:
    document = parse_html("<p>{{x}}</p><div title='[[y]]'></div>")

    result = scan_document(document)

    assert result.expressions == []
    assert result.warnings == []


def test_scan_template_covers_nested_templates() -> None:
    document = parse_html(ELEMENT, "my-el.html")
    outer, nested = get_all_data_binding_templates(document.ast)

    outer_result = scan_template(document, outer)
    nested_result = scan_template(document, nested)

    assert len(outer_result.expressions) == 6
    assert [e.expression_text for e in nested_result.expressions] == ["d"]


def test_warnings_are_collected_across_templates() -> None:
    document = parse_html(
        '<dom-bind><template>{{a + b}}'
        '<template is="dom-if" if="{{bad(}}">[[!ok]]</template>'
        "</template></dom-bind>"
    )

    result = scan_document(document)

    assert [e.expression_text for e in result.expressions] == ["a + b", "!ok"]
    assert [w.code for w in result.warnings] == [
        DiagnosticCode.INVALID_EXPRESSION,
        DiagnosticCode.PARSE_ERROR,
    ]


def test_custom_predicate_limits_scan() -> None:
    document = parse_html(ELEMENT, "my-el.html")
    predicate = data_binding_template_predicate(
        template_types=("dom-if",), host_elements=()
    )

    result = scan_document(document, predicate)

    assert [e.expression_text for e in result.expressions] == ["d"]
