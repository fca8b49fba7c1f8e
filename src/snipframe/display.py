"""
Display lines: the closed set of output variants a renderer has to draw.

Each variant is a frozen msgspec Struct tagged by a ``kind`` field, so a body
round-trips through JSON without losing which variant an entry was.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

import msgspec

from snipframe.snippet import Severity

__all__ = [
    "DisplayMark",
    "DisplayAnnotationType",
    "RawLine",
    "EmptySourceLine",
    "SourceLine",
    "AnnotationLine",
    "FoldLine",
    "DisplayLine",
]


class DisplayMark(StrEnum):
    ANNOTATION_START = "annotation_start"
    ANNOTATION_THROUGH = "annotation_through"

    @property
    def glyph(self) -> str:
        return "/" if self is DisplayMark.ANNOTATION_START else "|"


class DisplayAnnotationType(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    MULTILINE_START = "multiline_start"
    MULTILINE_END = "multiline_end"

    @classmethod
    def from_severity(cls, severity: Severity) -> DisplayAnnotationType:
        return cls.ERROR if severity is Severity.ERROR else cls.WARNING

    @property
    def is_multiline(self) -> bool:
        return self in {DisplayAnnotationType.MULTILINE_START, DisplayAnnotationType.MULTILINE_END}


class _Line(msgspec.Struct, frozen=True, tag_field="kind"):
    pass


class RawLine(_Line, tag="raw"):
    text: str


class EmptySourceLine(_Line, tag="empty"):
    pass


class SourceLine(_Line, tag="source"):
    lineno: int
    inline_marks: tuple[DisplayMark, ...]
    content: str


class AnnotationLine(_Line, tag="annotation"):
    inline_marks: tuple[DisplayMark, ...]
    range: tuple[int, int]  # line-relative columns, [start, end)
    label: str
    annotation_type: DisplayAnnotationType


class FoldLine(_Line, tag="fold"):
    pass


DisplayLine: TypeAlias = RawLine | EmptySourceLine | SourceLine | AnnotationLine | FoldLine
