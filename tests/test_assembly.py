from __future__ import annotations

import msgspec
import pytest

from snipframe.assembly import DisplayList, format_snippet
from snipframe.config import LayoutConfig
from snipframe.display import (
    AnnotationLine,
    DisplayAnnotationType,
    DisplayMark,
    EmptySourceLine,
    FoldLine,
    RawLine,
    SourceLine,
)
from snipframe.snippet import Annotation, Severity, Snippet


def _single_line() -> Snippet:
    return Snippet(
        "abc\ndef\n",
        origin="src/lib.rs",
        annotations=(Annotation(Severity.ERROR, label="oops", start=1, end=2),),
    )


def test_single_line_body() -> None:
    assert format_snippet(_single_line()).body == (
        EmptySourceLine(),
        SourceLine(1, (), "abc"),
        AnnotationLine((), (1, 2), "oops", DisplayAnnotationType.ERROR),
        SourceLine(2, (), "def"),
        EmptySourceLine(),
    )


def test_header_precedes_body() -> None:
    s = Snippet(
        "abc\ndef\n",
        line_start=51,
        origin="src/format.rs",
        annotations=(Annotation(Severity.ERROR, code="E0308", label="mismatched types", start=0, end=7),),
        title_annotation_pos=0,
        main_annotation_pos=0,
    )
    assert list(format_snippet(s)) == [
        RawLine("error[E0308]: mismatched types"),
        RawLine("  --> src/format.rs:51:1"),
        EmptySourceLine(),
        SourceLine(51, (DisplayMark.ANNOTATION_START,), "abc"),
        SourceLine(52, (DisplayMark.ANNOTATION_THROUGH,), "def"),
        AnnotationLine(
            (DisplayMark.ANNOTATION_THROUGH,),
            (2, 3),
            "mismatched types",
            DisplayAnnotationType.MULTILINE_END,
        ),
        EmptySourceLine(),
    ]


_PADDING_CASES = [
    Snippet(""),
    Snippet("just one line"),
    _single_line(),
    Snippet("a\nb\n", annotations=(Annotation(Severity.WARNING),), title_annotation_pos=0),
    Snippet(
        "".join(f"{i}\n" for i in range(30)),
        annotations=(
            Annotation(Severity.ERROR, start=0, end=1),
            Annotation(Severity.ERROR, start=80, end=81),
        ),
    ),
]


@pytest.mark.parametrize("snippet", _PADDING_CASES)
def test_body_is_padded(snippet: Snippet) -> None:
    body = [dl for dl in format_snippet(snippet) if not isinstance(dl, RawLine)]
    assert body[0] == EmptySourceLine()
    assert body[-1] == EmptySourceLine()
    assert sum(isinstance(dl, EmptySourceLine) for dl in body) == 2


@pytest.mark.parametrize("snippet", _PADDING_CASES)
def test_captions_and_folds_stay_between_source_lines(snippet: Snippet) -> None:
    body = list(format_snippet(snippet))
    source_idx = [i for i, dl in enumerate(body) if isinstance(dl, SourceLine)]
    for i, dl in enumerate(body):
        if isinstance(dl, AnnotationLine | FoldLine):
            assert source_idx[0] < i < len(body) - 1


def test_empty_source() -> None:
    assert format_snippet(Snippet("")).body == (EmptySourceLine(), EmptySourceLine())


def test_formatting_is_repeatable() -> None:
    s = _single_line()
    before = s.annotations
    assert format_snippet(s) == format_snippet(s)
    assert s.annotations == before


def test_from_snippet_matches_format_snippet() -> None:
    s = _single_line()
    cfg = LayoutConfig(fold=False)
    assert DisplayList.from_snippet(s, cfg) == format_snippet(s, cfg)
    assert len(DisplayList.from_snippet(s)) == 5


def test_encode_tags_variants() -> None:
    encoded = format_snippet(_single_line()).encode()
    assert encoded.startswith(b'{"body":[{"kind":"empty"}')
    assert b'{"kind":"source","lineno":1,"inline_marks":[],"content":"abc"}' in encoded
    assert b'"annotation_type":"error"' in encoded


def test_decode_restores_display_list() -> None:
    dl = format_snippet(_PADDING_CASES[-1])
    assert any(isinstance(line, FoldLine) for line in dl)
    assert DisplayList.decode(dl.encode()) == dl


def test_decode_handwritten_json() -> None:
    data = b"""
    {"body": [
        {"kind": "raw", "text": "warning[W1]: x"},
        {"kind": "empty"},
        {"kind": "source", "lineno": 3, "inline_marks": ["annotation_start"], "content": "a"},
        {"kind": "fold"}
    ]}
    """
    assert DisplayList.decode(data).body == (
        RawLine("warning[W1]: x"),
        EmptySourceLine(),
        SourceLine(3, (DisplayMark.ANNOTATION_START,), "a"),
        FoldLine(),
    )


def test_decode_rejects_unknown_variant() -> None:
    with pytest.raises(msgspec.ValidationError):
        DisplayList.decode(b'{"body": [{"kind": "banner", "text": "x"}]}')
