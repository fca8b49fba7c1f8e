"""
Body layout: turns a Snippet's lines and annotations into the display body.

The work happens in explicit passes:

1. `plan_placements` classifies every pending annotation against every line
   and records what should happen (attach a mark, insert a caption line)
   without touching any output sequence.
2. `apply_placements` materializes the body from those actions.
3. `fold_body` collapses long runs of plain lines between annotations.
4. `format_body` pads the result with one empty line on each side.
"""

from __future__ import annotations

import warnings
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from snipframe.config import LayoutConfig
from snipframe.display import (
    AnnotationLine,
    DisplayAnnotationType,
    DisplayLine,
    DisplayMark,
    EmptySourceLine,
    FoldLine,
    SourceLine,
)
from snipframe.errors import LayoutWarning
from snipframe.snippet import Annotation, Snippet
from snipframe.source import LineRange, SourceLines

__all__ = [
    "Relation",
    "AttachMark",
    "InsertAfter",
    "Placement",
    "classify",
    "plan_placements",
    "apply_placements",
    "fold_body",
    "format_body",
]


class Relation(StrEnum):
    AHEAD = "ahead"  # starts after this line
    CONTAINED = "contained"
    STARTS = "starts"  # starts on this line, ends on a later one
    THROUGH = "through"  # starts before and ends after this line
    ENDS = "ends"  # started earlier, ends on this line


def classify(ann: Annotation, line: LineRange) -> Relation | None:
    """
    First matching relationship between `ann` and `line`, or None when the
    annotation cannot be placed against it (no start, or no end yet needed).
    """
    start, end = ann.start, ann.end
    if start is None:
        return None
    if start > line.end:
        return Relation.AHEAD
    if end is None:
        return None
    if start in line:
        return Relation.CONTAINED if end in line else Relation.STARTS
    if start < line.start:
        if end > line.end:
            return Relation.THROUGH
        if end in line:
            return Relation.ENDS
    return None


# ────────────────────────── Placement actions ──────────────────────────


@dataclass(frozen=True, slots=True)
class AttachMark:
    line: int  # 0-indexed source line
    mark: DisplayMark


@dataclass(frozen=True, slots=True)
class InsertAfter:
    line: int  # 0-indexed source line
    annotation_line: AnnotationLine


Placement: TypeAlias = AttachMark | InsertAfter


def _caption(
    ann: Annotation,
    col_range: tuple[int, int],
    kind: DisplayAnnotationType,
    marks: tuple[DisplayMark, ...] = (),
) -> AnnotationLine:
    return AnnotationLine(
        inline_marks=marks,
        range=col_range,
        label=ann.label or "",
        annotation_type=kind,
    )


def _place(idx: int, line: LineRange, ann: Annotation, rel: Relation) -> list[Placement]:
    if ann.start is None or ann.end is None:
        return []
    through = (DisplayMark.ANNOTATION_THROUGH,)

    if rel is Relation.CONTAINED:
        col_range = (ann.start - line.start, ann.end - line.start)
        kind = DisplayAnnotationType.from_severity(ann.severity)
        return [InsertAfter(idx, _caption(ann, col_range, kind))]

    if rel is Relation.STARTS:
        col = ann.start - line.start
        if col == 0:
            return [AttachMark(idx, DisplayMark.ANNOTATION_START)]
        kind = DisplayAnnotationType.MULTILINE_START
        return [InsertAfter(idx, _caption(ann, (col, col + 1), kind, through))]

    if rel is Relation.THROUGH:
        return [AttachMark(idx, DisplayMark.ANNOTATION_THROUGH)]

    if rel is Relation.ENDS:
        col = ann.end - line.start
        kind = DisplayAnnotationType.MULTILINE_END
        return [
            AttachMark(idx, DisplayMark.ANNOTATION_THROUGH),
            InsertAfter(idx, _caption(ann, (col, col + 1), kind, through)),
        ]

    return []


_RESOLVING = frozenset({Relation.CONTAINED, Relation.ENDS})


def plan_placements(
    lines: SourceLines,
    annotations: Iterable[Annotation],
    *,
    origin: str | None = None,
) -> list[Placement]:
    """
    Walk the lines in order, testing every still-pending annotation against
    each one. Annotations leave the pending set once their end is placed.
    """
    pending = [a for a in annotations if a.is_positioned]
    placements: list[Placement] = []

    for idx, line in enumerate(lines.ranges):
        still_pending = []
        for ann in pending:
            rel = classify(ann, line)
            if rel is not None and rel is not Relation.AHEAD:
                placements.extend(_place(idx, line, ann, rel))
            if rel not in _RESOLVING:
                still_pending.append(ann)
        pending = still_pending

    for ann in pending:
        warnings.warn(
            LayoutWarning(
                f"annotation {ann.label or ''!r} has no end and was left out of the body",
                offset=ann.start,
                origin=origin,
            ),
            stacklevel=3,
        )
    return placements


def apply_placements(lines: SourceLines, placements: Sequence[Placement]) -> list[DisplayLine]:
    """
    Build the body: each source line with its marks, followed by the caption
    lines inserted after it in the order they were planned.
    """
    marks: defaultdict[int, list[DisplayMark]] = defaultdict(list)
    inserted: defaultdict[int, list[AnnotationLine]] = defaultdict(list)
    for p in placements:
        if isinstance(p, AttachMark):
            marks[p.line].append(p.mark)
        else:
            inserted[p.line].append(p.annotation_line)

    body: list[DisplayLine] = []
    for idx, content in enumerate(lines.lines):
        body.append(SourceLine(lines.lineno(idx), tuple(marks[idx]), content))
        body.extend(inserted[idx])
    return body


def fold_body(body: Sequence[DisplayLine], config: LayoutConfig | None = None) -> list[DisplayLine]:
    """
    Replace the middle of every long run of non-annotation lines that ends at
    an annotation line with a single FoldLine. The first `fold_keep_head`
    lines of the run and the last `fold_keep_tail` before the annotation stay.
    """
    cfg = config or LayoutConfig()
    out = list(body)
    if not cfg.fold:
        return out

    run = 0
    idx = 0
    while idx < len(out):
        if isinstance(out[idx], AnnotationLine):
            if run > cfg.fold_threshold:
                fold_start = idx - run + cfg.fold_keep_head
                fold_end = idx - cfg.fold_keep_tail
                out[fold_start:fold_end] = [FoldLine()]
                idx -= fold_end - fold_start - 1
            run = 0
        else:
            run += 1
        idx += 1
    return out


def format_body(snippet: Snippet, config: LayoutConfig | None = None) -> list[DisplayLine]:
    lines = snippet.lines
    placements = plan_placements(lines, snippet.annotations, origin=snippet.origin)
    body = apply_placements(lines, placements)
    body = fold_body(body, config)
    return [EmptySourceLine(), *body, EmptySourceLine()]
