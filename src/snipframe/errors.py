"""
snipframe exceptions and warning categories.
"""

from __future__ import annotations

__all__ = [
    "SnippetError",
    "SnipframeWarning",
    "LayoutWarning",
]


class SnippetError(ValueError):
    """An Annotation or Snippet whose fields contradict each other."""


class SnipframeWarning(Warning):
    """Base snipframe warning category."""


class LayoutWarning(SnipframeWarning):
    """
    An annotation the layout engine had to leave out of the body. `offset` is
    where the annotation starts and `origin` names the snippet it belongs to.
    """

    def __init__(self, message: str, *, offset: int | None = None, origin: str | None = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.origin = origin

    def __str__(self) -> str:
        return self.message
