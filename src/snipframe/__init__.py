r"""
snipframe
=========

Lay out annotated source snippets as display lists for diagnostic output.

Example:
    snippet = Snippet(
        source="abc\ndef\n",
        origin="src/lib.rs",
        annotations=[Annotation(Severity.ERROR, label="oops", start=1, end=2)],
        title_annotation_pos=0,
        main_annotation_pos=0,
    )
    display_list = format_snippet(snippet)
"""

from __future__ import annotations

from snipframe.assembly import DisplayList, format_snippet
from snipframe.config import LayoutConfig
from snipframe.display import (
    AnnotationLine,
    DisplayAnnotationType,
    DisplayLine,
    DisplayMark,
    EmptySourceLine,
    FoldLine,
    RawLine,
    SourceLine,
)
from snipframe.errors import LayoutWarning, SnipframeWarning, SnippetError
from snipframe.header import format_header
from snipframe.layout import format_body
from snipframe.snippet import Annotation, Severity, Snippet, load_snippet

__all__ = [
    "Annotation",
    "AnnotationLine",
    "DisplayAnnotationType",
    "DisplayLine",
    "DisplayList",
    "DisplayMark",
    "EmptySourceLine",
    "FoldLine",
    "LayoutConfig",
    "LayoutWarning",
    "RawLine",
    "Severity",
    "SnipframeWarning",
    "Snippet",
    "SnippetError",
    "SourceLine",
    "format_body",
    "format_header",
    "format_snippet",
    "load_snippet",
]
