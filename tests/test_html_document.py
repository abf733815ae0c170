from __future__ import annotations

from markup.document import COMMENT, DOCUMENT, DOCUMENT_FRAGMENT, TEXT, parse_html
from markup.traversal import has_tag_name, is_text_node, query_all
from model.source import SourcePosition


def test_template_children_live_in_content_fragment() -> None:
    document = parse_html("<template><b>x</b></template>", "t.html")

    (template,) = document.ast.child_nodes
    assert document.ast.node_name == DOCUMENT
    assert template.tag_name == "template"
    assert template.child_nodes == []
    assert template.content is not None
    assert template.content.node_name == DOCUMENT_FRAGMENT
    assert template.content.parent is None
    (bold,) = template.content.child_nodes
    assert bold.tag_name == "b"
    assert bold.parent is template.content


def test_text_nodes_keep_raw_source() -> None:
    contents = "<p>a &amp; {{b}}\n  c</p>"
    document = parse_html(contents)

    (paragraph,) = document.ast.child_nodes
    (text,) = paragraph.child_nodes
    assert is_text_node(text)
    assert text.node_name == TEXT
    assert text.value == "a &amp; {{b}}\n  c"


def test_names_are_lowercased_and_comments_kept() -> None:
    document = parse_html('<DIV Title="x"><!-- note --></DIV>')

    (div,) = document.ast.child_nodes
    assert div.tag_name == "div"
    assert div.get_attribute("title") == "x"
    (comment,) = div.child_nodes
    assert comment.node_name == COMMENT


def test_node_source_range() -> None:
    document = parse_html("<div>\n  <span>hi</span>\n</div>", "r.html")

    (span,) = query_all(document.ast, has_tag_name("span"))
    source_range = document.source_range_for_node(span)
    assert source_range.file == "r.html"
    assert source_range.start == SourcePosition(line=1, column=2)
    assert source_range.end == SourcePosition(line=1, column=17)


def test_attribute_value_ranges() -> None:
    document = parse_html('<a href="{{url}}" alt=bare empty="" flag></a>')

    (anchor,) = document.ast.child_nodes
    quoted = document.source_range_for_attribute_value(anchor, "href")
    unquoted = document.source_range_for_attribute_value(
        anchor, "href", exclude_quotes=True
    )
    assert quoted is not None and unquoted is not None
    assert (quoted.start.column, quoted.end.column) == (8, 17)
    assert (unquoted.start.column, unquoted.end.column) == (9, 16)

    bare = document.source_range_for_attribute_value(
        anchor, "alt", exclude_quotes=True
    )
    assert bare is not None
    assert (bare.start.column, bare.end.column) == (22, 26)

    assert anchor.get_attribute("empty") == ""
    assert anchor.get_attribute("flag") == ""
    assert document.source_range_for_attribute_value(anchor, "flag") is None
    assert document.source_range_for_attribute_value(anchor, "missing") is None


def test_columns_count_characters_not_bytes() -> None:
    document = parse_html("<p>héllo <i>x</i></p>")

    (italic,) = query_all(document.ast, has_tag_name("i"))
    assert document.source_range_for_node(italic).start.column == 9
