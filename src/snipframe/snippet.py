"""
Input model: a Snippet is a source excerpt plus the annotations to draw on it.

Offsets in `Annotation.start` / `Annotation.end` are expressed in the layout
coordinate space of `snipframe.source.SourceLines` and are validated against it
when the Snippet is constructed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import msgspec
import msgspec.json

from snipframe.errors import SnippetError
from snipframe.source import SourceLines

__all__ = [
    "Severity",
    "Annotation",
    "Snippet",
    "load_snippet",
]


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Annotation:
    severity: Severity
    code: str | None = None
    label: str | None = None
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        if self.start is None:
            if self.end is not None:
                raise SnippetError(f"Annotation has an end ({self.end}) but no start")
            return
        if self.start < 0:
            raise SnippetError(f"Annotation.start cannot be negative (got {self.start})")
        if self.end is not None and self.end < self.start:
            raise SnippetError(f"Annotation.end ({self.end}) < start ({self.start})")

    @property
    def is_positioned(self) -> bool:
        return self.start is not None


@dataclass(frozen=True, slots=True)
class Snippet:
    source: str
    line_start: int = 1
    origin: str | None = None
    annotations: tuple[Annotation, ...] = ()
    title_annotation_pos: int | None = None
    main_annotation_pos: int | None = None

    def __post_init__(self) -> None:
        # accept any sequence from callers, store a tuple
        if not isinstance(self.annotations, tuple):
            object.__setattr__(self, "annotations", tuple(self.annotations))

        for name in ("title_annotation_pos", "main_annotation_pos"):
            pos = getattr(self, name)
            if pos is not None and not (0 <= pos < len(self.annotations)):
                raise SnippetError(
                    f"Snippet.{name} ({pos}) is not a valid index into "
                    f"{len(self.annotations)} annotation(s)"
                )

        extent = self.lines.extent
        for i, ann in enumerate(self.annotations):
            if ann.start is None:
                continue
            if extent is None:
                raise SnippetError(f"Annotation #{i} is positioned but the source has no lines")
            last = ann.end if ann.end is not None else ann.start
            if last > extent:
                raise SnippetError(
                    f"Annotation #{i} range ({ann.start}, {ann.end}) exceeds source extent {extent}"
                )

    @property
    def lines(self) -> SourceLines:
        return SourceLines.from_text(self.source, self.line_start)

    @property
    def title_annotation(self) -> Annotation | None:
        if self.title_annotation_pos is None:
            return None
        return self.annotations[self.title_annotation_pos]

    @property
    def main_annotation(self) -> Annotation | None:
        if self.main_annotation_pos is None:
            return None
        return self.annotations[self.main_annotation_pos]

    @classmethod
    def from_builtins(cls, data: Mapping[str, Any]) -> Snippet:
        return msgspec.convert(data, type=cls)


def load_snippet(data: bytes | str) -> Snippet:
    """Decode a Snippet from its JSON description."""
    return msgspec.json.decode(data, type=Snippet)
