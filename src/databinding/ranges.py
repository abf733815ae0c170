"""Translation of string offsets into line/column source ranges."""

from __future__ import annotations

from model.source import SourcePosition, SourceRange


def find_newline_indexes(text: str) -> list[int]:
    """Offsets of every ``\\n`` in ``text``, ascending."""
    indexes: list[int] = []
    index = text.find("\n")
    while index != -1:
        indexes.append(index)
        index = text.find("\n", index + 1)
    return indexes


def indexes_to_source_range(
    start_index: int,
    end_index: int,
    filename: str,
    newline_indexes: list[int],
) -> SourceRange:
    """Range of ``[start_index, end_index)`` relative to the string's start.

    Args:
        start_index: Offset of the first character
        end_index: Offset just past the last character
        filename: File recorded on the range
        newline_indexes: Result of ``find_newline_indexes`` for the string

    Returns:
        SourceRange whose line 0 is the string's first line.
    """
    start_line = 0
    start_of_line = 0
    end_line = 0
    end_of_line = 0
    for index in newline_indexes:
        if index >= end_index:
            break
        if index < start_index:
            start_line += 1
            start_of_line = index + 1
        end_line += 1
        end_of_line = index + 1
    return SourceRange(
        file=filename,
        start=SourcePosition(line=start_line, column=start_index - start_of_line),
        end=SourcePosition(line=end_line, column=end_index - end_of_line),
    )


__all__ = ["find_newline_indexes", "indexes_to_source_range"]
