from __future__ import annotations

import pytest

from databinding.scanner import RawBinding, find_bindings


def test_finds_both_delimiters_in_order() -> None:
    bindings = find_bindings("Hi {{name}}, you have [[count]] messages")

    assert bindings == [
        RawBinding(expression_text="name", start_index=5, end_index=9, direction="{"),
        RawBinding(
            expression_text="count", start_index=24, end_index=29, direction="["
        ),
    ]


def test_indexes_point_inside_delimiters() -> None:
    text = "a{{b}}c"
    (binding,) = find_bindings(text)

    assert text[binding.start_index : binding.end_index] == "b"
    assert text[binding.start_index - 2 : binding.start_index] == "{{"
    assert text[binding.end_index : binding.end_index + 2] == "}}"


@pytest.mark.parametrize(
    "text",
    ["", "no bindings here", "{single} [brackets]", "{{unclosed", "[[also unclosed"],
)
def test_no_bindings(text: str) -> None:
    assert find_bindings(text) == []


def test_unclosed_opener_stops_scanning() -> None:
    bindings = find_bindings("{{a}} {{b [[c]]")

    assert [b.expression_text for b in bindings] == ["a"]


def test_delimiters_do_not_nest() -> None:
    (binding,) = find_bindings("[[a {{b]] c}}")

    assert binding.direction == "["
    assert binding.expression_text == "a {{b"


def test_empty_binding_is_reported() -> None:
    (binding,) = find_bindings("{{}}")

    assert binding.expression_text == ""
    assert binding.start_index == binding.end_index == 2


def test_multiline_binding_text_is_kept_verbatim() -> None:
    (binding,) = find_bindings("{{foo(\n  bar)}}")

    assert binding.expression_text == "foo(\n  bar)"
