"""Source positions and ranges in document coordinates."""

from __future__ import annotations

from typing import overload

from pydantic import BaseModel, ConfigDict


class SourcePosition(BaseModel):
    """A 0-indexed line/column pair."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class SourceRange(BaseModel):
    """Half-open range within a file; ``end`` is exclusive."""

    model_config = ConfigDict(frozen=True)

    file: str
    start: SourcePosition
    end: SourcePosition


class LocationOffset(BaseModel):
    """Absolute position of the start of some substring of a document.

    Used to shift a range computed relative to that substring into the
    coordinates of the enclosing document.
    """

    model_config = ConfigDict(frozen=True)

    line: int
    col: int
    filename: str | None = None

    @classmethod
    def of(cls, source_range: SourceRange) -> LocationOffset:
        return cls(line=source_range.start.line, col=source_range.start.column)


def correct_position(
    position: SourcePosition, offset: LocationOffset
) -> SourcePosition:
    # Only positions on the first line of the substring share a line with its
    # start, so only those pick up its column.
    return SourcePosition(
        line=position.line + offset.line,
        column=position.column + (offset.col if position.line == 0 else 0),
    )


@overload
def correct_source_range(
    source_range: SourceRange, offset: LocationOffset
) -> SourceRange: ...


@overload
def correct_source_range(
    source_range: SourceRange | None, offset: LocationOffset | None
) -> SourceRange | None: ...


def correct_source_range(
    source_range: SourceRange | None, offset: LocationOffset | None
) -> SourceRange | None:
    """Compose a range relative to some substring with that substring's offset.

    Returns the range unchanged when either argument is missing. Apply once per
    nested coordinate frame, innermost first.
    """
    if source_range is None or offset is None:
        return source_range
    return SourceRange(
        file=offset.filename or source_range.file,
        start=correct_position(source_range.start, offset),
        end=correct_position(source_range.end, offset),
    )


__all__ = [
    "LocationOffset",
    "SourcePosition",
    "SourceRange",
    "correct_position",
    "correct_source_range",
]
