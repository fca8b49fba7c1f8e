"""
snipframe.constants
===================

Single place for the layout thresholds and header defaults. The layout engine,
the header formatter and `LayoutConfig` all read their defaults from here.
"""

from __future__ import annotations

# ---- header ------------------------------------------------------------------

DEFAULT_CODE = "E0000"

# Location emitted when row/col resolution is switched off.
PLACEHOLDER_ROW = 52
PLACEHOLDER_COL = 1

# ---- folding -----------------------------------------------------------------

FOLD_THRESHOLD = 10  # plain lines before an annotation line that trigger a fold
FOLD_KEEP_HEAD = 5  # lines kept after the previous annotation
FOLD_KEEP_TAIL = 2  # lines kept before the next annotation

# ---- environment -------------------------------------------------------------

ENV_COLOR = "SNIPFRAME_COLOR"
ENV_PRETTY_WARNINGS = "SNIPFRAME_PRETTY_WARNINGS"
