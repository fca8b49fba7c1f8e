from __future__ import annotations

import pytest

from snipframe.config import LayoutConfig
from snipframe.display import (
    AnnotationLine,
    DisplayAnnotationType,
    DisplayLine,
    EmptySourceLine,
    FoldLine,
    SourceLine,
)
from snipframe.layout import fold_body, format_body
from snipframe.snippet import Annotation, Severity, Snippet
from snipframe.source import SourceLines


def _numbered_source(n: int) -> str:
    return "".join(f"line{i}\n" for i in range(1, n + 1))


def _annotated(n: int, *annotated_lines: int) -> Snippet:
    """n plain lines with a short annotation at the start of each given (1-indexed) line."""
    src = _numbered_source(n)
    ranges = SourceLines.from_text(src).ranges
    anns = tuple(
        Annotation(Severity.ERROR, label=f"at {ln}", start=ranges[ln - 1].start + 1, end=ranges[ln - 1].start + 3)
        for ln in annotated_lines
    )
    return Snippet(src, annotations=anns)


def _shape(body: list[DisplayLine]) -> list[str | int]:
    out: list[str | int] = []
    for dl in body:
        if isinstance(dl, SourceLine):
            out.append(dl.lineno)
        elif isinstance(dl, AnnotationLine):
            out.append("A")
        elif isinstance(dl, FoldLine):
            out.append("...")
        elif isinstance(dl, EmptySourceLine):
            out.append("_")
    return out


def test_fold_between_first_and_last_line() -> None:
    body = format_body(_annotated(20, 1, 20))
    assert _shape(body) == ["_", 1, "A", 2, 3, 4, 5, 6, "...", 19, 20, "A", "_"]
    assert sum(isinstance(dl, FoldLine) for dl in body) == 1


def test_run_at_threshold_is_not_folded() -> None:
    # lines 2..11 are ten plain entries before the second caption
    body = format_body(_annotated(11, 1, 11))
    assert not any(isinstance(dl, FoldLine) for dl in body)


def test_run_just_over_threshold_is_folded() -> None:
    body = format_body(_annotated(12, 1, 12))
    assert _shape(body) == ["_", 1, "A", 2, 3, 4, 5, 6, "...", 11, 12, "A", "_"]


def test_leading_run_is_folded() -> None:
    body = format_body(_annotated(15, 15))
    assert _shape(body) == ["_", 1, 2, 3, 4, 5, "...", 14, 15, "A", "_"]


def test_trailing_run_is_kept() -> None:
    body = format_body(_annotated(20, 1))
    assert not any(isinstance(dl, FoldLine) for dl in body)
    assert len(body) == 20 + 1 + 2


def test_every_long_run_gets_its_own_fold() -> None:
    body = format_body(_annotated(40, 1, 20, 40))
    assert _shape(body) == [
        "_", 1, "A",
        2, 3, 4, 5, 6, "...", 19, 20, "A",
        21, 22, 23, 24, 25, "...", 39, 40, "A",
        "_",
    ]


def test_fold_can_be_disabled() -> None:
    body = format_body(_annotated(20, 1, 20), LayoutConfig(fold=False))
    assert not any(isinstance(dl, FoldLine) for dl in body)


def test_custom_thresholds() -> None:
    caption = AnnotationLine((), (0, 1), "", DisplayAnnotationType.ERROR)
    body: list[DisplayLine] = [SourceLine(i, (), f"l{i}") for i in range(1, 6)]
    body.append(caption)
    cfg = LayoutConfig(fold_threshold=3, fold_keep_head=1, fold_keep_tail=1)
    assert fold_body(body, cfg) == [
        SourceLine(1, (), "l1"),
        FoldLine(),
        SourceLine(5, (), "l5"),
        caption,
    ]


def test_fold_body_does_not_mutate_input() -> None:
    caption = AnnotationLine((), (0, 1), "", DisplayAnnotationType.ERROR)
    body: list[DisplayLine] = [SourceLine(i, (), "") for i in range(1, 13)] + [caption]
    before = list(body)
    fold_body(body)
    assert body == before


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fold_threshold": 3},
        {"fold_keep_head": -1},
        {"fold_keep_tail": -1, "fold_threshold": 2, "fold_keep_head": 0},
    ],
)
def test_layout_config_rejects_inconsistent_fold_settings(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        LayoutConfig(**kwargs)  # type: ignore[arg-type]
