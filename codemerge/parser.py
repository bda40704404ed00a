"""Splitting source text into a tree of typed code blocks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .block import Block
from .block_type import BlockType, MergeConfig, _find_submatches
from .pair_count import PairCount, pair_key_split

log = logging.getLogger(__name__)

_ROOT_TYPE = BlockType(
    sub_merge_type=(MergeConfig(append=True),),
    subs_separator="\n",
)


def _before(text: str, sep: str) -> str:
    """The part of ``text`` before the first ``sep``."""
    if sep == "":
        return text[:1]
    return text.split(sep, 1)[0]


def _scan_lines(content: str) -> list[str]:
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass
class BlockParser:
    """Reads text into blocks using a list of block types tried in order."""

    types: list[BlockType] = field(default_factory=list)
    pair_keys: list[str] = field(default_factory=list)
    origin_text: list[str] = field(default_factory=list)
    head_viscous_pair_key: list[str] = field(default_factory=list)
    line_comment_key: str = ""
    pending_line_prefix: str = ""

    def parse(self, content: str) -> Block:
        """Parse a whole text into a root block whose single sub level holds the top blocks."""
        root = Block(
            key="",
            type=_ROOT_TYPE,
            origin_string=content,
            sub_origin_strings=[content],
            block_parser=self,
        )
        root.sub_list = [self.blocks_from_string(root, content, None)]
        return root

    def block_from_string(
        self, parent: Block | None, content: str, must_type_names: Sequence[str] | None
    ) -> list[Block]:
        """Match one chunk of text against the types; the first type that matches wins."""
        allowed: list[str] = []
        for typ in self.types:
            if typ.reg_str is None:
                continue
            if must_type_names is not None and typ.name not in must_type_names:
                continue
            if typ.parent_names:
                if parent is None or parent.type.name not in typ.parent_names:
                    continue
            allowed.append(typ.name)

            found: list[Block] = []
            for parts, spans in _find_submatches(typ.reg_str, content):
                count = len(typ.reg_sub_content_index)
                item = Block(
                    key="",
                    type=typ,
                    origin_string=parts[0],
                    sub_origin_strings=[""] * count,
                    sub_list=[[] for _ in range(count)],
                    reg_origin_strings=list(parts),
                    reg_origin_indexes=list(spans),
                    sub_origin_index=[None] * count,
                    parent=parent,
                    block_parser=self,
                )
                if typ.reg_key_index >= 0:
                    item.key = parts[typ.reg_key_index].strip()
                for sub_index, group in enumerate(typ.reg_sub_content_index):
                    item.sub_origin_strings[sub_index] = parts[group]
                    item.sub_origin_index[sub_index] = spans[group]
                    item.sub_list[sub_index].extend(
                        self.blocks_from_string(
                            item, parts[group], typ.reg_sub_content_type_names[sub_index]
                        )
                    )
                found.append(item)
            if found:
                return found

        if allowed and _before(content, self.line_comment_key).strip():
            log.warning(
                "unknown block (must types %s, allowed types %s):\n%s",
                must_type_names,
                allowed,
                content,
            )
        return []

    def blocks_from_string(
        self, parent: Block, content: str, must_type_names: Sequence[str] | None
    ) -> list[Block]:
        """Cut a text into balanced chunks line by line and parse each chunk."""
        lines = _scan_lines(content)
        pairs = PairCount(keywords=list(self.pair_keys), origin_text=list(self.origin_text or ()))
        result: list[Block] = []
        current = ""
        last = len(lines) - 1
        for i, line in enumerate(lines):
            no_comment = _before(line, self.line_comment_key)
            effect_key = pairs.add(no_comment)
            if current or no_comment.strip():
                current += line
                if i != last or content.endswith("\n"):
                    current += "\n"

            pending = False
            if self.pending_line_prefix and i < last:
                if lines[i + 1].strip(" \t").startswith(self.pending_line_prefix):
                    pending = True
            if not pending and effect_key and effect_key in (self.head_viscous_pair_key or ()):
                _, tail = pair_key_split(effect_key)
                if no_comment.strip().endswith(tail):
                    pending = True
            if not pending and parent.type.sub_tail_char:
                stripped = line.strip(" \t")
                if not any(stripped.endswith(tail) for tail in parent.type.sub_tail_char):
                    pending = True

            if not pending and pairs.is_zero():
                result.extend(self.block_from_string(parent, current, must_type_names))
                current = ""
        if current:
            result.extend(self.block_from_string(parent, current, must_type_names))
        return result