"""Raw delimiter scanning for ``{{...}}`` and ``[[...]]`` bindings."""

from __future__ import annotations

import re
from dataclasses import dataclass

from model.expressions import BindingDirection

_OPENERS = re.compile(r"\{\{|\[\[")
_CLOSERS: dict[str, str] = {"{{": "}}", "[[": "]]"}


@dataclass(frozen=True)
class RawBinding:
    """A delimited span; indexes point at the text inside the delimiters."""

    expression_text: str
    start_index: int
    end_index: int
    direction: BindingDirection


def find_bindings(text: str) -> list[RawBinding]:
    """Find every binding span in ``text``, left to right.

    Delimiters do not nest. An opener without a matching closer ends the scan:
    nothing after it is reported.

    >>> [(b.direction, b.expression_text) for b in find_bindings("a {{x}} [[y]]")]
    [('{', 'x'), ('[', 'y')]
    """
    bindings: list[RawBinding] = []
    position = 0
    while True:
        match = _OPENERS.search(text, position)
        if match is None:
            break
        opener = match.group(0)
        start_index = match.end()
        end_index = text.find(_CLOSERS[opener], start_index)
        if end_index == -1:
            break
        bindings.append(
            RawBinding(
                expression_text=text[start_index:end_index],
                start_index=start_index,
                end_index=end_index,
                direction="{" if opener == "{{" else "[",
            )
        )
        position = end_index + 2
    return bindings


__all__ = ["RawBinding", "find_bindings"]
