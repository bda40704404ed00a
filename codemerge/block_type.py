"""Block kinds and the merge settings that drive block parsing and merging."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

Span = tuple[int, int]


def _as_tuple(values: Iterable | None) -> tuple:
    return tuple(values) if values is not None else ()


@dataclass(frozen=True)
class MergeConfig:
    """How the incoming blocks of one sub level are merged into a found block."""

    append: bool = False
    replace_block_type: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "replace_block_type", _as_tuple(self.replace_block_type))


@dataclass(frozen=True)
class BlockType:
    """Describes one kind of code block and how its pattern splits into sub blocks.

    ``reg_sub_content_type_names`` holds, for every sub level, the block type
    names allowed there, or ``None`` when any type is allowed.
    """

    name: str = ""
    reg_str: re.Pattern[str] | None = None
    reg_origin_index: int = 0
    reg_key_index: int = 0
    reg_sub_content_index: tuple[int, ...] = ()
    reg_sub_content_type_names: tuple[tuple[str, ...] | None, ...] = ()
    sub_merge_type: tuple[MergeConfig | None, ...] = ()
    parent_names: tuple[str, ...] = ()
    subs_separator: str = ""
    sub_warp_char: str = ""
    reg_sub_warp_content_index: int = 0
    key_case_ignored: bool = False
    sub_tail_char: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "reg_sub_content_index", _as_tuple(self.reg_sub_content_index))
        object.__setattr__(
            self,
            "reg_sub_content_type_names",
            tuple(None if names is None else tuple(names) for names in _as_tuple(self.reg_sub_content_type_names)),
        )
        object.__setattr__(self, "sub_merge_type", _as_tuple(self.sub_merge_type))
        object.__setattr__(self, "parent_names", _as_tuple(self.parent_names))
        object.__setattr__(self, "sub_tail_char", _as_tuple(self.sub_tail_char))

    def to_json(self) -> str:
        """Serialise the type as its quoted name."""
        return f'"{self.name}"'


def _find_submatches(pattern: re.Pattern[str], text: str) -> list[tuple[list[str], list[Span | None]]]:
    """Return every match of ``pattern`` as its group strings and group spans.

    Unmatched groups give an empty string and a ``None`` span.  An empty match
    that directly follows the previous match is skipped.
    """
    results: list[tuple[list[str], list[Span | None]]] = []
    previous_end = -1
    for match in pattern.finditer(text):
        if match.start() == match.end() == previous_end:
            continue
        previous_end = match.end()
        count = (pattern.groups or 0) + 1
        parts = [match.group(i) or "" for i in range(count)]
        spans: list[Span | None] = [None if match.start(i) < 0 else match.span(i) for i in range(count)]
        results.append((parts, spans))
    return results