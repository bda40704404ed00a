"""Parsed code blocks and the operations that merge one block tree into another."""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .block_type import BlockType, Span, _find_submatches

log = logging.getLogger(__name__)

_LINE_COMMENT = re.compile(r"[\t ]*//.*?\n")
_EDGE_SPACE = " \t\n"


class _BlockSource(Protocol):
    def blocks_from_string(
        self, parent: Block, content: str, must_type_names: Sequence[str] | None
    ) -> list[Block]: ...


def _split(text: str, sep: str) -> list[str]:
    """Split ``text`` by ``sep``; an empty separator splits into single characters."""
    if sep == "":
        return list(text)
    return text.split(sep)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Block:
    """One parsed code block and the sub blocks found inside its pattern groups.

    Equality compares the text, key, type and sub blocks; the identifier,
    the parent link, the parser and the recorded match positions are ignored.
    """

    key: str = ""
    type: BlockType = field(default_factory=BlockType)
    origin_string: str = ""
    sub_origin_strings: list[str] = field(default_factory=list)
    sub_list: list[list[Block]] = field(default_factory=list)
    reg_origin_strings: list[str] = field(default_factory=list, compare=False)
    reg_origin_indexes: list[Span | None] = field(default_factory=list, compare=False)
    sub_origin_index: list[Span | None] = field(default_factory=list, compare=False)
    parent: Block | None = field(default=None, compare=False, repr=False)
    block_parser: _BlockSource | None = field(default=None, compare=False, repr=False)
    id: str = field(default_factory=_new_id, compare=False)

    # ----- copying and lookup -------------------------------------------------

    def clone(self) -> Block:
        """Deep copy of this block and its sub blocks, keeping the same parent."""
        return self._clone(self.parent)

    def _clone(self, parent: Block | None) -> Block:
        copy = Block(
            key=self.key,
            type=self.type,
            origin_string=self.origin_string,
            sub_origin_strings=list(self.sub_origin_strings),
            reg_origin_strings=list(self.reg_origin_strings),
            reg_origin_indexes=list(self.reg_origin_indexes),
            sub_origin_index=list(self.sub_origin_index),
            parent=parent,
            block_parser=self.block_parser,
            id=self.id,
        )
        copy.sub_list = [[sub._clone(copy) for sub in subs] for subs in self.sub_list]
        return copy

    @staticmethod
    def _same_key(block: Block, typ: BlockType, key: str) -> bool:
        block_key, find_key = block.key, key
        if block.type.key_case_ignored or typ.key_case_ignored:
            block_key, find_key = block_key.lower(), find_key.lower()
        return block.type.name == typ.name and block_key == find_key

    def find(self, typ: BlockType, key: str, target_sub_level: int) -> Block | None:
        """Find a block of ``typ`` and ``key``.

        Level 0 checks this block itself; level ``n`` searches sub level ``n - 1``.
        """
        if target_sub_level == 0:
            return self if self._same_key(self, typ, key) else None
        for sub_index, subs in enumerate(self.sub_list):
            if sub_index + 1 != target_sub_level:
                continue
            for sub in subs:
                if self._same_key(sub, typ, key):
                    return sub
        return None

    def sub_join_string(self, target_sub_index: int) -> str:
        """Text used to join a new sub block onto the given sub level."""
        subs = self.sub_list[target_sub_index]
        sub_origin = self.sub_origin_strings[target_sub_index]
        if len(subs) > 1:
            left = subs[0].origin_string.strip()
            right = subs[1].origin_string.strip()
            first_and_join = _split(sub_origin, right)[0]
            joins = _split(first_and_join, left)
            if len(joins) > 1:
                result = joins[-1]
                while (comment := _LINE_COMMENT.search(result)) and comment.group(0):
                    result = result.replace(comment.group(0), "", 1)
                return result

        first_and_join = ""
        if len(subs) == 1:
            right = subs[0].origin_string.strip()
            first_and_join = _split(subs[0].origin_string, right)[0]

        if not self.type.subs_separator:
            return ""
        separators = self.type.subs_separator.split("|")
        tail = ""
        if subs:
            pieces = _split(sub_origin, subs[0].origin_string)
            if len(pieces) > 1:
                tail = pieces[1]
        separator = next(
            (sep for sep in separators if len(subs) > 1 and tail.startswith(sep) and sep),
            separators[0],
        )
        if separator.strip(" \n\r\t"):
            separator += " "
        return separator + first_and_join

    # ----- keeping the text and the tree in step -----------------------------

    def _on_origin_string_merged(self) -> None:
        """Re-read the pattern groups and sub texts after ``origin_string`` changed."""
        typ = self.type
        if typ.reg_str is None:
            self.sub_origin_strings = [self.origin_string] * len(self.sub_origin_strings)
            return
        for parts, spans in _find_submatches(typ.reg_str, self.origin_string):
            missing = len(parts) - len(self.reg_origin_strings)
            if missing > 0:
                self.reg_origin_strings.extend([""] * missing)
                self.reg_origin_indexes.extend([None] * missing)
            for i, (part, span) in enumerate(zip(parts, spans)):
                self.reg_origin_strings[i] = part
                if span is not None:
                    self.reg_origin_indexes[i] = span
            for sub_index, group in enumerate(typ.reg_sub_content_index):
                self.sub_origin_strings[sub_index] = parts[group]
                if spans[group] is not None:
                    self.sub_origin_index[sub_index] = spans[group]
                if self.block_parser is None:
                    raise ValueError(f"block {self.key}({typ.name}) has no parser to read its sub blocks")
                reparsed = self.block_parser.blocks_from_string(
                    self, self.sub_origin_strings[sub_index], typ.reg_sub_content_type_names[sub_index]
                )
                for sub in self.sub_list[sub_index]:
                    match = next(
                        (new for new in reparsed if new.type.name == sub.type.name and new.key == sub.key),
                        None,
                    )
                    if match is not None:
                        sub.origin_string = match.origin_string
                        sub._on_origin_string_merged()
                    else:
                        log.warning(
                            "sub block %s(%s) of %s(%s) not found after re-reading %r; found types %s keys %s",
                            sub.key,
                            sub.type.name,
                            self.key,
                            typ.name,
                            self.sub_origin_strings[sub_index],
                            [new.type.name for new in reparsed],
                            [new.key for new in reparsed],
                        )

    def _sub_index_of(self, child: Block) -> int:
        return next(
            (i for i, subs in enumerate(self.sub_list) if any(sub.id == child.id for sub in subs)),
            -1,
        )

    def _in_parent_reg_origin_strings_index(self) -> int:
        parent = self.parent
        if parent is None:
            return -1
        sub_index = parent._sub_index_of(self)
        if sub_index < 0:
            return -1
        target = parent.sub_origin_index[sub_index]
        return next((i for i, span in enumerate(parent.reg_origin_indexes) if span == target), -1)

    def _in_parent_sub_level(self) -> int:
        parent = self.parent
        if parent is None:
            return -1
        if self.id == parent.id:
            return 0
        index = parent._sub_index_of(self)
        return index + 1 if index >= 0 else -1

    def _add_sub_position(self, income: Block) -> tuple[int, str] | None:
        """Where to insert ``income`` into this block's text when its sub level is empty."""
        if not self.origin_string:
            return 0, income.origin_string
        income_index = income._in_parent_reg_origin_strings_index()
        if income_index < 0:
            return None
        parent = income.parent
        assert parent is not None
        if parent.origin_string.replace(income.origin_string, "", 1) == self.origin_string:
            return parent.origin_string.find(income.origin_string), income.origin_string

        groups = parent.reg_origin_strings

        # look for a later group of the income's parent that this block also has
        text = income.origin_string
        item = groups[income_index]
        for candidate in groups[income_index + 1 :]:
            if not candidate:
                continue
            for j, own in enumerate(self.reg_origin_strings):
                if own == candidate:
                    pos = self.reg_origin_indexes[j][0]
                    while pos > 0 and self.origin_string[pos - 1] in _EDGE_SPACE:
                        pos -= 1
                    return pos, text
            if item in candidate:
                text = candidate.replace(item, text, 1)
                item = candidate

        # look for an earlier group of the income's parent that this block also has
        text = income.origin_string
        item = groups[income_index]
        for i in reversed(range(income_index)):
            candidate = groups[i]
            if not candidate:
                continue
            enclosing = next((g for g in reversed(groups[:i]) if g and candidate in g), "")
            for j, own in enumerate(self.reg_origin_strings):
                if own == candidate and (not enclosing or enclosing not in self.reg_origin_strings):
                    return self.reg_origin_indexes[j][1], text
            if item in candidate:
                text = candidate.replace(item, text, 1)
                item = candidate
        return None

    def _propagate_to_parent(self, old_origin: str) -> None:
        parent = self.parent
        if parent is None:
            return
        index = self._in_parent_sub_level() - 1
        if index < 0:
            raise ValueError(f"block {self.key}({self.type.name}) is not a sub block of its parent")
        new_sub_origin = parent.sub_origin_strings[index].replace(old_origin, self.origin_string, 1)
        parent._update_sub_origin_string(index, new_sub_origin)

    def _update_sub_origin_string(self, target_sub_index: int, new_sub_origin: str) -> None:
        """Replace one sub level's text here and in every ancestor."""
        old_sub_origin = self.sub_origin_strings[target_sub_index]
        old_origin = self.origin_string
        self.sub_origin_strings[target_sub_index] = new_sub_origin
        self.origin_string = self.origin_string.replace(old_sub_origin, new_sub_origin, 1)
        self._on_origin_string_merged()
        self._propagate_to_parent(old_origin)

    def _checked_sub_index(self, target_sub_level: int, action: str) -> int:
        level = max(target_sub_level, 1)
        if len(self.sub_list) < level:
            raise ValueError(f"{action} error: {self.key}({self.type.name}) target_sub_level: {level}")
        return level - 1

    # ----- editing ------------------------------------------------------------

    def add_sub(self, target_sub_level: int, income: Block) -> None:
        """Append a copy of ``income`` to a sub level, updating the text of the tree."""
        index = self._checked_sub_index(target_sub_level, "add_sub")

        join = self.sub_join_string(index)
        if not join and income.parent is not None:
            income_level = income._in_parent_sub_level()
            if income_level >= 1:
                join = income.parent.sub_join_string(income_level - 1) or join

        new_sub = income.clone()
        new_sub.parent = self
        self.sub_list[index].append(new_sub)

        if self.sub_origin_strings[index]:
            new_sub_origin = (
                self.sub_origin_strings[index].rstrip(_EDGE_SPACE) + join + income.origin_string.lstrip(_EDGE_SPACE)
            )
            self._update_sub_origin_string(index, new_sub_origin)
            return

        position = self._add_sub_position(income)
        if position is None:
            raise ValueError(
                f"cannot add {income.key}({income.type.name}) to sub level {index + 1} "
                f"of {self.key}({self.type.name})"
            )
        pos, text = position
        old_origin = self.origin_string
        self.origin_string = old_origin[:pos] + text + old_origin[pos:]
        self._on_origin_string_merged()
        self._propagate_to_parent(old_origin)

    def del_sub(self, target_sub_level: int, target: Block) -> None:
        """Remove ``target`` from a sub level and its text from the tree."""
        index = self._checked_sub_index(target_sub_level, "del_sub")
        self.sub_list[index] = [sub for sub in self.sub_list[index] if sub.id != target.id]
        if not self.sub_origin_strings[index]:
            raise ValueError(
                f"cannot delete {target.key}({target.type.name}) from sub level {index + 1} "
                f"of {self.key}({self.type.name})"
            )
        self._update_sub_origin_string(index, self.sub_origin_strings[index].replace(target.origin_string, "", 1))

    def replace_sub(self, target_sub_level: int, replace_block_types: Sequence[str], target: Block) -> None:
        """Drop the sub blocks of the given types and put ``target`` in their place.

        The last existing block of ``target``'s type is replaced in place; when
        there is none, ``target`` is added to ``target_sub_level``.
        """
        by_type: dict[str, list[Block]] = {}
        for subs in self.sub_list:
            for sub in subs:
                if sub.type.name in replace_block_types:
                    by_type.setdefault(sub.type.name, []).append(sub)

        update_block: Block | None = None
        for type_name, blocks in by_type.items():
            keep_last = type_name == target.type.name
            for block in blocks[:-1] if keep_last else blocks:
                self.del_sub(block._in_parent_sub_level(), block)
            if keep_last:
                update_block = blocks[-1]

        if update_block is None:
            self.add_sub(target_sub_level, target)
            return
        index = update_block._in_parent_sub_level() - 1
        new_sub = target.clone()
        new_sub.parent = self
        self.sub_list[index] = [new_sub]
        new_sub_origin = self.sub_origin_strings[index].replace(update_block.origin_string, new_sub.origin_string, 1)
        self._update_sub_origin_string(index, new_sub_origin)

    def merge(self, target_sub_level: int, income: Block) -> Block:
        """Merge ``income`` into this block at the given sub level and return this block."""
        found = self.find(income.type, income.key, target_sub_level)
        if found is None:
            self.add_sub(target_sub_level, income)
            return self
        for sub_index, subs in enumerate(income.sub_list):
            for sub in subs:
                merge_type = income.type.sub_merge_type[sub_index]
                if merge_type is not None and merge_type.append:
                    found.merge(sub_index + 1, sub)
                if merge_type is not None and merge_type.replace_block_type:
                    found.replace_sub(sub_index + 1, merge_type.replace_block_type, sub)
        return self