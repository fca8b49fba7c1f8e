"""
snipframe reporting: a rich renderer for display lists, a snippet-carrying
exception, and a lightweight Emitter. The layout core never imports this module.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

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
from snipframe.snippet import Annotation, Severity, Snippet

__all__ = [
    "FrameConfig",
    "Theme",
    "DiagnosticError",
    "Emitter",
    "render_display_list",
    "render_snippet",
    "single_annotation_snippet",
    "warn",
    "error",
]


# ─────────────────────── Rendering config/theme ───────────────────────


@dataclass(frozen=True, slots=True)
class FrameConfig:
    fold_marker: str = "..."
    error_underline: str = "^"
    warning_underline: str = "-"


@dataclass(frozen=True, slots=True)
class Theme:
    error_header: str = "bold red"
    warn_header: str = "bold yellow"
    location: str = "italic"
    line_no: str = "bold blue"
    gutter: str = "bold blue"
    code: str = ""
    error_mark: str = "bold red"
    warn_mark: str = "bold yellow"
    connector: str = "bold red"
    label: str = ""
    fold: str = "dim"


def _header_style(text: str, theme: Theme) -> str:
    if text.startswith(Severity.ERROR):
        return theme.error_header
    if text.startswith(Severity.WARNING):
        return theme.warn_header
    return theme.location


def _underline(line: AnnotationLine, cfg: FrameConfig) -> str:
    start, end = line.range
    kind = line.annotation_type
    if kind.is_multiline:
        return "_" * start + "^"
    char = cfg.error_underline if kind is DisplayAnnotationType.ERROR else cfg.warning_underline
    return " " * start + char * max(1, end - start)


def _underline_style(kind: DisplayAnnotationType, theme: Theme) -> str:
    if kind is DisplayAnnotationType.WARNING:
        return theme.warn_mark
    if kind is DisplayAnnotationType.ERROR:
        return theme.error_mark
    return theme.connector


# ────────────────────────── Line renderer ──────────────────────────


def _render_line(
    dl: DisplayLine, gutter_w: int, marks_w: int, theme: Theme, cfg: FrameConfig
) -> Text:
    if isinstance(dl, RawLine):
        return Text(dl.text, style=_header_style(dl.text, theme))
    if isinstance(dl, FoldLine):
        return Text(cfg.fold_marker, style=theme.fold)

    line = Text()
    if isinstance(dl, SourceLine):
        line.append(f"{dl.lineno:>{gutter_w}}", style=theme.line_no)
    else:
        line.append(" " * gutter_w)
    line.append(" |", style=theme.gutter)
    if isinstance(dl, EmptySourceLine):
        return line

    marks: tuple[DisplayMark, ...] = dl.inline_marks
    for mark in marks:
        line.append(mark.glyph, style=theme.connector)
    line.append(" " * (marks_w - len(marks)) + " ")

    if isinstance(dl, SourceLine):
        line.append(dl.content, style=theme.code)
    else:
        line.append(_underline(dl, cfg), style=_underline_style(dl.annotation_type, theme))
        if dl.label and dl.annotation_type is not DisplayAnnotationType.MULTILINE_START:
            line.append(" ")
            line.append(dl.label, style=theme.label)
    line.rstrip()
    return line


def render_display_list(
    display_list: DisplayList,
    *,
    theme: Theme | None = None,
    cfg: FrameConfig | None = None,
) -> Text:
    """
    Draw every display line of `display_list` into one rich Text, one row per
    entry. Line numbers are right-aligned to the widest one in the body and
    inline marks are padded to a common column.
    """
    theme = theme or Theme()
    cfg = cfg or FrameConfig()

    linenos = [len(str(dl.lineno)) for dl in display_list if isinstance(dl, SourceLine)]
    gutter_w = max(linenos, default=1)
    marks_w = max(
        (len(dl.inline_marks) for dl in display_list if isinstance(dl, SourceLine | AnnotationLine)),
        default=0,
    )

    body = Text()
    for i, dl in enumerate(display_list):
        if i:
            body.append("\n")
        body.append(_render_line(dl, gutter_w, marks_w, theme, cfg))
    return body


def render_snippet(
    snippet: Snippet,
    *,
    theme: Theme | None = None,
    cfg: FrameConfig | None = None,
    layout: LayoutConfig | None = None,
) -> Text:
    return render_display_list(format_snippet(snippet, layout), theme=theme, cfg=cfg)


# ────────────────────────── Exception ──────────────────────────


@dataclass(slots=True)
class DiagnosticError(Exception):
    """
    Exception that carries a Snippet and renders it as a frame with Rich.
    """

    snippet: Snippet

    # Plain-text fallback (CI/log files; or if user didn't use Console)
    def __str__(self) -> str:
        return render_snippet(self.snippet).plain

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        yield render_snippet(self.snippet)


# ────────────────────────── Emitter (opt-in) ──────────────────────────


def single_annotation_snippet(
    severity: Severity,
    message: str,
    source: str,
    start: int | None = None,
    end: int | None = None,
    *,
    code: str | None = None,
    origin: str | None = None,
    line_start: int = 1,
) -> Snippet:
    """A Snippet whose only annotation is both its title and its main one."""
    return Snippet(
        source=source,
        line_start=line_start,
        origin=origin,
        annotations=(Annotation(severity, code=code, label=message, start=start, end=end),),
        title_annotation_pos=0,
        main_annotation_pos=0,
    )


class Emitter:
    """
    Lightweight printer for snippets. You can create ad-hoc instances,
    or use the module-level helpers below.
    """

    def __init__(
        self,
        console: Console | None = None,
        theme: Theme | None = None,
        cfg: FrameConfig | None = None,
        layout: LayoutConfig | None = None,
    ):
        self.console = console or Console()
        self.theme = theme or Theme()
        self.cfg = cfg or FrameConfig()
        self.layout = layout or LayoutConfig()

    def emit(self, snippet: Snippet) -> None:
        self.emit_display_list(format_snippet(snippet, self.layout))

    def emit_display_list(self, display_list: DisplayList) -> None:
        self.console.print(render_display_list(display_list, theme=self.theme, cfg=self.cfg))

    def warn(
        self,
        message: str,
        source: str,
        start: int | None = None,
        end: int | None = None,
        *,
        code: str | None = None,
        origin: str | None = None,
        line_start: int = 1,
    ) -> None:
        self.emit(
            single_annotation_snippet(
                Severity.WARNING,
                message,
                source,
                start,
                end,
                code=code,
                origin=origin,
                line_start=line_start,
            )
        )

    def error(
        self,
        message: str,
        source: str,
        start: int | None = None,
        end: int | None = None,
        *,
        code: str | None = None,
        origin: str | None = None,
        line_start: int = 1,
    ) -> None:
        self.emit(
            single_annotation_snippet(
                Severity.ERROR,
                message,
                source,
                start,
                end,
                code=code,
                origin=origin,
                line_start=line_start,
            )
        )


# Optional module-level shortcuts
_default_emitter = Emitter()


def warn(*a, **k):  # type: ignore[no-untyped-def]
    _default_emitter.warn(*a, **k)


def error(*a, **k):  # type: ignore[no-untyped-def]
    _default_emitter.error(*a, **k)
