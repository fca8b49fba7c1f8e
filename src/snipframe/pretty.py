"""
Console helpers for scripts and notebooks that want to look at snippets
without wiring up an Emitter by hand.

    show(snippet)                    # Snippet, DisplayList or snippet JSON
    with use_diagnostics() as console:
        ...                          # snipframe warnings drawn on `console`
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import msgspec
from rich.console import Console
from rich.text import Text

from snipframe.assembly import DisplayList, format_snippet
from snipframe.config import LayoutConfig
from snipframe.constants import ENV_COLOR, ENV_PRETTY_WARNINGS
from snipframe.errors import SnippetError
from snipframe.reporting.diagnostics import DiagnosticError, Emitter, FrameConfig, Theme
from snipframe.reporting.warnings_bridge import install_warnings_bridge
from snipframe.snippet import Snippet, load_snippet

__all__ = ["make_console", "show", "use_diagnostics"]


def make_console(color: str | None = None) -> Console:
    """stderr Console; `color` is 'auto' | 'always' | 'never' (default: $SNIPFRAME_COLOR)."""
    mode = (color or os.getenv(ENV_COLOR) or "auto").lower()
    return Console(
        stderr=True,
        force_terminal=(mode == "always"),
        no_color=(mode == "never"),
    )


def _load(data: bytes | str, em: Emitter) -> Snippet:
    try:
        return load_snippet(data)
    except (SnippetError, msgspec.DecodeError) as e:
        em.console.print(
            Text.assemble(("error", em.theme.error_header), f": invalid snippet: {e}")
        )
        raise


def show(
    item: Snippet | DisplayList | bytes | str,
    *,
    console: Console | None = None,
    layout: LayoutConfig | None = None,
    theme: Theme | None = None,
    cfg: FrameConfig | None = None,
) -> DisplayList:
    """
    Lay out (if needed) and print `item`, returning the display list drawn.
    JSON input that does not describe a valid snippet is reported on the
    console and the decoding error is re-raised.
    """
    em = Emitter(console or make_console(), theme=theme, cfg=cfg, layout=layout)
    if isinstance(item, (bytes, str)):
        item = _load(item, em)
    if isinstance(item, Snippet):
        item = format_snippet(item, em.layout)
    em.emit_display_list(item)
    return item


@contextmanager
def use_diagnostics(
    *,
    color: str | None = None,
    pretty: bool | str | None = None,
) -> Iterator[Console]:
    """
    Draw snipframe warnings on a rich Console for the duration of the block.

    `pretty` (default: $SNIPFRAME_PRETTY_WARNINGS, else 'auto') decides whether
    the warnings bridge is installed; 'auto' installs it only on a terminal.
    A DiagnosticError leaving the block is printed as a frame, then re-raised.
    """
    console = make_console(color)
    setting = str(pretty if pretty is not None else os.getenv(ENV_PRETTY_WARNINGS, "auto")).lower()
    on_tty = sys.stderr.isatty() or sys.stdout.isatty()

    uninstall = None
    if setting in {"true", "1"} or (setting == "auto" and on_tty):
        uninstall = install_warnings_bridge(emitter=Emitter(console=console))
    try:
        yield console
    except DiagnosticError as e:
        console.print(e)
        raise
    finally:
        if uninstall:
            uninstall()
