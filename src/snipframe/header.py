from __future__ import annotations

from snipframe.config import LayoutConfig
from snipframe.constants import PLACEHOLDER_COL, PLACEHOLDER_ROW
from snipframe.display import RawLine
from snipframe.snippet import Annotation, Snippet


def _location(snippet: Snippet, main: Annotation, cfg: LayoutConfig) -> tuple[int, int]:
    if not cfg.resolve_location:
        return PLACEHOLDER_ROW, PLACEHOLDER_COL
    if main.start is None:
        return snippet.line_start, 1
    return snippet.lines.locate(main.start)


def format_header(snippet: Snippet, config: LayoutConfig | None = None) -> list[RawLine]:
    """
    Title line ("error[E0000]: label") for the title annotation and a location
    line ("  --> origin:row:col") when a main annotation is designated.
    """
    cfg = config or LayoutConfig()
    header: list[RawLine] = []

    title = snippet.title_annotation
    if title is not None:
        code = title.code if title.code is not None else cfg.default_code
        header.append(RawLine(f"{title.severity}[{code}]: {title.label or ''}"))

    main = snippet.main_annotation
    if main is not None:
        row, col = _location(snippet, main, cfg)
        header.append(RawLine(f"  --> {snippet.origin or ''}:{row}:{col}"))

    return header
