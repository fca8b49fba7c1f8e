"""
snipframe.reporting
===================

Rich rendering of display lists and the opt-in warnings bridge.
"""

from __future__ import annotations

from snipframe.reporting.diagnostics import (
    DiagnosticError,
    Emitter,
    FrameConfig,
    Theme,
    render_display_list,
    render_snippet,
    single_annotation_snippet,
)
from snipframe.reporting.warnings_bridge import (
    DiagnosticWarning,
    format_layout_warning,
    install_warnings_bridge,
)

__all__ = [
    "DiagnosticError",
    "DiagnosticWarning",
    "Emitter",
    "FrameConfig",
    "Theme",
    "format_layout_warning",
    "install_warnings_bridge",
    "render_display_list",
    "render_snippet",
    "single_annotation_snippet",
]
