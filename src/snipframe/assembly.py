from __future__ import annotations

from collections.abc import Iterator

import msgspec
import msgspec.json

from snipframe.config import LayoutConfig
from snipframe.display import DisplayLine
from snipframe.header import format_header
from snipframe.layout import format_body
from snipframe.snippet import Snippet

__all__ = ["DisplayList", "format_snippet"]


class DisplayList(msgspec.Struct, frozen=True):
    body: tuple[DisplayLine, ...] = ()

    @classmethod
    def from_snippet(cls, snippet: Snippet, config: LayoutConfig | None = None) -> DisplayList:
        return format_snippet(snippet, config)

    def __iter__(self) -> Iterator[DisplayLine]:
        return iter(self.body)

    def __len__(self) -> int:
        return len(self.body)

    def encode(self) -> bytes:
        return msgspec.json.encode(self)

    @classmethod
    def decode(cls, data: bytes | str) -> DisplayList:
        return msgspec.json.decode(data, type=cls)


def format_snippet(snippet: Snippet, config: LayoutConfig | None = None) -> DisplayList:
    """Header lines followed by the padded body."""
    cfg = config or LayoutConfig()
    return DisplayList((*format_header(snippet, cfg), *format_body(snippet, cfg)))
