from __future__ import annotations

import bisect
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True, slots=True)
class LineRange:
    '''Offsets covered by one source line; both ends are matched inclusively.'''
    start: int
    end: int

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, int) and self.start <= pos <= self.end


def split_lines(text: str) -> list[str]:
    # Only "\n" separates lines; a trailing "\r" belongs to the separator and an
    # empty final segment is not a line.
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _compute_line_ranges(lines: list[str]) -> tuple[LineRange, ...]:
    # Each line spans its characters plus one separator, and consecutive lines
    # are joined by one more offset. Annotation offsets are expressed in this
    # coordinate space.
    ranges = []
    pos = 0
    for line in lines:
        end = pos + len(line) + 1
        ranges.append(LineRange(pos, end))
        pos = end + 1
    return tuple(ranges)


@dataclass(frozen=True, slots=True)
class SourceLines:
    lines: tuple[str, ...]
    line_start: int = 1

    _ranges: tuple[LineRange, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_text(cls, text: str, line_start: int = 1) -> SourceLines:
        return cls(tuple(split_lines(text)), line_start)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def ranges(self) -> tuple[LineRange, ...]:
        rs = self._ranges
        if rs is None:
            rs = _compute_line_ranges(list(self.lines))
            object.__setattr__(self, "_ranges", rs)
        return rs

    @property
    def extent(self) -> int | None:
        '''Last offset an annotation may reference, or None for an empty source.'''
        if not self.ranges:
            return None
        return self.ranges[-1].end

    def lineno(self, idx: int) -> int:
        return self.line_start + idx

    def line_index(self, pos: int) -> int:
        '''0-indexed line holding `pos`.'''
        extent = self.extent
        if extent is None or not (0 <= pos <= extent):
            raise ValueError(f"pos {pos} out of range [0, {extent}]")
        starts = [r.start for r in self.ranges]
        return bisect.bisect_right(starts, pos) - 1

    def locate(self, pos: int) -> tuple[int, int]:
        '''returns (row, col): row is numbered from `line_start`, col is 1-indexed.'''
        idx = self.line_index(pos)
        return (self.lineno(idx), pos - self.ranges[idx].start + 1)
