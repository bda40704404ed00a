import re

import pytest

from codemerge.block import Block
from codemerge.block_type import BlockType, MergeConfig

LINE = BlockType(name="line", reg_str=re.compile(r"(?s)^\s*((\w+):\s*(\w+))\s*$"), reg_key_index=2)
DOC = BlockType(name="doc", reg_str=re.compile(r'(?s)^\s*"(.*)"\s*$'), reg_key_index=1)
DOC2 = BlockType(name="doc2", reg_str=re.compile(r"(?s)^\s*'(.*)'\s*$"), reg_key_index=1)
ROOT = BlockType(name="", sub_merge_type=[MergeConfig(append=True)], subs_separator="\n")


def leaf(key, text, typ=LINE):
    return Block(key=key, type=typ, origin_string=text)


def make_root(*children):
    text = "".join(child.origin_string for child in children)
    root = Block(type=ROOT, origin_string=text, sub_origin_strings=[text], sub_list=[list(children)])
    for child in children:
        child.parent = root
    return root


def keys(block, level=0):
    return [sub.key for sub in block.sub_list[level]]


def test_find_sub_block():
    b = leaf("b", "b: Int\n")
    root = make_root(leaf("a", "a: Int\n"), b)
    assert root.find(LINE, "b", 1) is b
    assert root.find(LINE, "x", 1) is None
    assert root.find(DOC, "b", 1) is None


def test_find_level_zero_is_self():
    root = make_root(leaf("a", "a: Int\n"))
    assert root.find(ROOT, "", 0) is root
    assert root.find(LINE, "", 0) is None


def test_find_case_ignored():
    loose = BlockType(name="line", key_case_ignored=True)
    a = leaf("Name", "Name: Int\n")
    root = make_root(a)
    assert root.find(loose, "name", 1) is a
    assert root.find(LINE, "name", 1) is None


def test_clone_is_deep_and_keeps_identity():
    root = make_root(leaf("a", "a: Int\n"), leaf("b", "b: Int\n"))
    copy = root.clone()
    assert copy == root
    assert copy.id == root.id
    assert copy.sub_list[0][0] is not root.sub_list[0][0]
    assert copy.sub_list[0][0].parent is copy
    copy.sub_list[0].pop()
    assert keys(root) == ["a", "b"]


def test_equality_ignores_id_and_parent():
    first = leaf("a", "a: Int\n")
    second = leaf("a", "a: Int\n")
    second.parent = make_root()
    assert first.id != second.id
    assert first == second
    assert first != leaf("b", "a: Int\n")


def test_sub_join_string_from_existing_comma():
    typ = BlockType(name="args", subs_separator="\n|,")
    block = Block(
        type=typ,
        sub_origin_strings=["a: Int, b: Int"],
        sub_list=[[leaf("a", "a: Int"), leaf("b", " b: Int")]],
    )
    assert block.sub_join_string(0) == ", "


def test_sub_join_string_drops_line_comment():
    block = Block(
        type=ROOT,
        sub_origin_strings=["a: Int // note\nb: Int\n"],
        sub_list=[[leaf("a", "a: Int"), leaf("b", "b: Int")]],
    )
    assert block.sub_join_string(0) == ""


def test_sub_join_string_single_sub_uses_first_separator():
    newline = Block(type=ROOT, sub_origin_strings=["a: Int"], sub_list=[[leaf("a", "a: Int")]])
    assert newline.sub_join_string(0) == "\n"
    comma = Block(
        type=BlockType(name="opts", subs_separator=",|\n"),
        sub_origin_strings=["a: Int"],
        sub_list=[[leaf("a", "a: Int")]],
    )
    assert comma.sub_join_string(0) == ", "


def test_sub_join_string_without_separator():
    block = Block(type=BlockType(name="x"), sub_origin_strings=["a: Int"], sub_list=[[leaf("a", "a: Int")]])
    assert block.sub_join_string(0) == ""


def test_add_sub_appends_text_and_copy():
    root = make_root(leaf("a", "a: Int\n"), leaf("b", "b: Int\n"))
    income = leaf("c", "c: Int\n")
    root.add_sub(1, income)
    assert keys(root) == ["a", "b", "c"]
    assert root.origin_string == "a: Int\nb: Int\nc: Int\n"
    assert root.sub_origin_strings == [root.origin_string]
    added = root.sub_list[0][-1]
    assert added is not income
    assert added.parent is root
    assert income.parent is None


def test_add_sub_into_empty_block():
    root = make_root()
    income = leaf("c", "c: Int\n")
    root.add_sub(0, income)
    assert root.origin_string == income.origin_string
    assert root.sub_origin_strings == [income.origin_string]
    assert keys(root) == ["c"]


def test_add_sub_level_out_of_range():
    root = make_root(leaf("a", "a: Int\n"))
    with pytest.raises(ValueError):
        root.add_sub(2, leaf("c", "c: Int\n"))


def test_del_sub_removes_text():
    b = leaf("b", "b: Int\n")
    root = make_root(leaf("a", "a: Int\n"), b)
    root.del_sub(0, b)
    assert keys(root) == ["a"]
    assert root.origin_string == "a: Int\n"
    assert root.sub_origin_strings == [root.origin_string]


def test_del_sub_from_empty_text_fails():
    root = make_root()
    with pytest.raises(ValueError):
        root.del_sub(1, leaf("a", "a: Int\n"))


def test_del_sub_level_out_of_range():
    a = leaf("a", "a: Int\n")
    root = make_root(a)
    with pytest.raises(ValueError):
        root.del_sub(3, a)


def test_replace_sub_keeps_one_of_target_type():
    root = make_root(leaf("x", '"x"\n', DOC), leaf("y", '"y"\n', DOC))
    target = leaf("z", '"z"\n', DOC)
    root.replace_sub(1, ["doc"], target)
    assert keys(root) == ["z"]
    assert root.origin_string == target.origin_string


def test_replace_sub_removes_other_listed_types():
    root = make_root(leaf("x", '"x"\n', DOC), leaf("w", "'w'\n", DOC2))
    target = leaf("z", '"z"\n', DOC)
    root.replace_sub(1, ["doc", "doc2"], target)
    assert keys(root) == ["z"]
    assert root.origin_string == target.origin_string


def test_replace_sub_adds_when_absent():
    root = make_root(leaf("a", "a: Int\n"))
    target = leaf("z", '"z"\n', DOC)
    root.replace_sub(1, ["doc"], target)
    assert keys(root) == ["a", "z"]
    assert root.origin_string.startswith("a: Int\n")
    assert root.origin_string.endswith(target.origin_string)


def test_merge_appends_missing_blocks():
    root = make_root(leaf("a", "a: Int\n"), leaf("b", "b: Int\n"))
    income = make_root(leaf("b", "b: Int\n"), leaf("c", "c: Int\n"))
    result = root.merge(0, income)
    assert result is root
    assert keys(root) == ["a", "b", "c"]
    assert root.origin_string == "a: Int\nb: Int\nc: Int\n"


def test_merge_same_content_is_unchanged():
    root = make_root(leaf("a", "a: Int\n"), leaf("b", "b: Int\n"))
    before = root.clone()
    root.merge(0, make_root(leaf("a", "a: Int\n")))
    assert root == before


def test_merge_different_type_at_level_zero_adds():
    root = make_root(leaf("a", "a: Int\n"))
    income = leaf("c", "c: Int\n")
    root.merge(1, income)
    assert keys(root) == ["a", "c"]
    assert root.origin_string.endswith(income.origin_string)