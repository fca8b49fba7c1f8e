from __future__ import annotations

from dataclasses import dataclass

from snipframe.constants import DEFAULT_CODE, FOLD_KEEP_HEAD, FOLD_KEEP_TAIL, FOLD_THRESHOLD


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    fold: bool = True
    fold_threshold: int = FOLD_THRESHOLD
    fold_keep_head: int = FOLD_KEEP_HEAD
    fold_keep_tail: int = FOLD_KEEP_TAIL
    resolve_location: bool = True  # False emits PLACEHOLDER_ROW:PLACEHOLDER_COL
    default_code: str = DEFAULT_CODE

    def __post_init__(self) -> None:
        if self.fold_keep_head < 0 or self.fold_keep_tail < 0:
            raise ValueError(
                f"Fold context cannot be negative (got head={self.fold_keep_head}, "
                f"tail={self.fold_keep_tail})"
            )
        # a run of fold_threshold + 1 lines must leave at least one line to fold
        if self.fold_threshold < self.fold_keep_head + self.fold_keep_tail:
            raise ValueError(
                f"fold_threshold ({self.fold_threshold}) must be >= fold_keep_head + "
                f"fold_keep_tail ({self.fold_keep_head + self.fold_keep_tail})"
            )
