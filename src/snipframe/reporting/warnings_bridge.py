"""
Route snipframe warnings through a rich Console instead of the plain
``warnings`` formatter. Filters and ``catch_warnings`` keep working; only the
display step changes, and only while the bridge is installed.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console
from rich.text import Text

from snipframe.errors import LayoutWarning, SnipframeWarning
from snipframe.reporting.diagnostics import Emitter, render_snippet
from snipframe.snippet import Snippet

__all__ = [
    "DiagnosticWarning",
    "format_layout_warning",
    "install_warnings_bridge",
]


@dataclass(slots=True)
class DiagnosticWarning(SnipframeWarning):
    """Warning whose payload is a whole snippet; drawn as a frame by the bridge."""

    snippet: Snippet

    def __str__(self) -> str:
        return render_snippet(self.snippet).plain


def format_layout_warning(w: LayoutWarning, emitter: Emitter) -> Text:
    """
    Two rows: the warning text, then where the dropped annotation starts
    ("  --> origin @ offset N"), styled like a frame header.
    """
    theme = emitter.theme
    out = Text()
    out.append("warning", style=theme.warn_header)
    out.append(f": {w.message}")
    if w.offset is not None or w.origin is not None:
        out.append("\n  --> ", style=theme.gutter)
        where = w.origin or "<snippet>"
        if w.offset is not None:
            where += f" @ offset {w.offset}"
        out.append(where, style=theme.location)
    return out


def install_warnings_bridge(
    *,
    emitter: Emitter | None = None,
    only_snipframe: bool = True,
) -> Callable[[], None]:
    """
    Replace ``warnings.showwarning`` and return a callable that restores it.

    - DiagnosticWarning: the carried snippet is emitted as a frame.
    - LayoutWarning: message plus the origin and offset of the dropped annotation.
    - any other SnipframeWarning: one line with its category and call site.
    - foreign warnings go to the previous handler unless `only_snipframe` is False.
    """
    em = emitter or Emitter(Console(stderr=True))

    prev_showwarning = warnings.showwarning

    def _showwarning(
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        if isinstance(message, DiagnosticWarning):
            em.emit(message.snippet)
        elif isinstance(message, LayoutWarning):
            em.console.print(format_layout_warning(message, em))
        elif only_snipframe and not issubclass(category, SnipframeWarning):
            prev_showwarning(message, category, filename, lineno, file=file, line=line)
        else:
            em.console.print(f"{category.__name__}: {message} ({filename}:{lineno})", markup=False)

    warnings.showwarning = _showwarning

    def uninstall() -> None:
        warnings.showwarning = prev_showwarning

    return uninstall
