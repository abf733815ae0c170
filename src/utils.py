"""Shared utilities."""

from __future__ import annotations

from bisect import bisect_right


class SourceText:
    """Character-accurate view over a UTF-8 source buffer.

    Tree-sitter reports byte offsets and byte columns. Everything this project
    exposes is measured in characters, so parsers convert through this class.

    Examples:
        >>> source = SourceText("ab\\ncd")
        >>> source.position(4)
        (1, 1)
        >>> SourceText("é{{x}}").char_offset(3)
        2
    """

    __slots__ = ("_byte_to_char", "_line_starts", "data", "text")

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf8")
        self._line_starts = [0]
        self._line_starts.extend(
            index + 1 for index, char in enumerate(text) if char == "\n"
        )
        self._byte_to_char: list[int] | None = None
        if not text.isascii():
            mapping: list[int] = []
            for index, char in enumerate(text):
                mapping.extend([index] * len(char.encode("utf8")))
            mapping.append(len(text))
            self._byte_to_char = mapping

    def char_offset(self, byte_offset: int) -> int:
        """Convert a byte offset into a character offset."""
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    def position(self, char_offset: int) -> tuple[int, int]:
        """Return the 0-indexed (line, column) of a character offset."""
        line = bisect_right(self._line_starts, char_offset) - 1
        return line, char_offset - self._line_starts[line]

    def byte_position(self, byte_offset: int) -> tuple[int, int]:
        """Return the 0-indexed (line, character column) of a byte offset."""
        return self.position(self.char_offset(byte_offset))

    def slice_bytes(self, start_byte: int, end_byte: int) -> str:
        return self.data[start_byte:end_byte].decode("utf8", errors="replace")


__all__ = ["SourceText"]
