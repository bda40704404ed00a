"""Block types and parser for GraphQL schema text."""

from __future__ import annotations

import re

from .block_type import BlockType, MergeConfig
from .parser import BlockParser


def _re(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.ASCII)


_REPLACE_EXPLAIN = MergeConfig(append=False, replace_block_type=("explain", "explain2"))
_APPEND = MergeConfig(append=True)

GRAPHQL_TYPE = BlockType(
    name="type",
    reg_str=_re(
        r'(?s)^\s*((\s*""".*?"""\n)?(\s*".*?"\n)?((extend\s+)?\s*type\s+(\w+))\s*(implements\s+\w+\s*)?\s*(\{\n?(.*?[^\n]*\n?)\s*\}\n?))\s*\Z'
    ),
    reg_origin_index=1,
    reg_key_index=6,
    reg_sub_content_index=(2, 3, 9),
    reg_sub_content_type_names=(("explain",), ("explain2",), ("type_field", "explain", "explain2")),
    sub_merge_type=(_REPLACE_EXPLAIN, _REPLACE_EXPLAIN, _APPEND),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=5,
)

GRAPHQL_TYPE_FIELD = BlockType(
    name="type_field",
    reg_str=_re(
        r'(?s)^((\s*""".*?"""\n)?(\s*".*?"\n)?\s*(\w+)(\(\n?([\S\s]*?\n?)\n*?\s*\))?:\s*([\w!\[\]]+)(\s*@[^\n]*)*)\s*\Z'
    ),
    reg_origin_index=1,
    reg_key_index=4,
    reg_sub_content_index=(2, 3, 6),
    reg_sub_content_type_names=(("explain",), ("explain2",), ("type_field_arg",)),
    sub_merge_type=(_REPLACE_EXPLAIN, _REPLACE_EXPLAIN, MergeConfig(append=False)),
    parent_names=("type",),
    subs_separator="\n|,",
    sub_warp_char="()",
    reg_sub_warp_content_index=3,
    key_case_ignored=True,
)

GRAPHQL_TYPE_FIELD_ARG = BlockType(
    name="type_field_arg",
    reg_str=_re(
        r'(?s)(\s*""".*?"""\n)?(\s*".*?"\n)?\s*((\w+):\s*([\w!\[\]]+)(\s*=\s*[\w]*)?(\s*@[^\n]*)?)\s*'
    ),
    reg_origin_index=3,
    reg_key_index=4,
    reg_sub_content_index=(1, 2),
    reg_sub_content_type_names=(("explain",), ("explain2",)),
    sub_merge_type=(_REPLACE_EXPLAIN, _REPLACE_EXPLAIN, None),
    parent_names=("type_field",),
    key_case_ignored=True,
)

GRAPHQL_INPUT = BlockType(
    name="input",
    reg_str=_re(
        r'(?s)^(\s*""".*?"""\n)?(\s*".*?"\n)?\s*((extend\s+)?\s*input\s+(\w+))\s*(implements\s+\w+\s*)?\s*(\{\n?(.*?[^\n]*\n?)\s*\}\n?)\s*\Z'
    ),
    reg_origin_index=0,
    reg_key_index=5,
    reg_sub_content_index=(1, 2, 8),
    reg_sub_content_type_names=(("explain",), ("explain2",), ("input_field", "explain", "explain2")),
    sub_merge_type=(_REPLACE_EXPLAIN, _REPLACE_EXPLAIN, _APPEND),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=4,
)

GRAPHQL_INPUT_FIELD = BlockType(
    name="input_field",
    reg_str=_re(
        r'(?s)^((\s*""".*?"""\n)?(\s*".*?"\n)?\s*(\w+)(\(([\S\s]+)\))?:\s*([\w!\[\]]+)(\s*=\s*[\w]*)?(\s*@[^\n]*)*)\s*\Z'
    ),
    reg_origin_index=1,
    reg_key_index=4,
    reg_sub_content_index=(2, 3),
    reg_sub_content_type_names=(("explain",), ("explain2",)),
    sub_merge_type=(_REPLACE_EXPLAIN, _REPLACE_EXPLAIN),
    parent_names=("input",),
    subs_separator="\n|,",
    sub_warp_char="()",
    reg_sub_warp_content_index=3,
    key_case_ignored=True,
)

GRAPHQL_ENUM = BlockType(
    name="enum",
    reg_str=_re(r"(?s)^\s*((extend\s+)?\s*enum\s+(\w+)\s*(implements\s+\w+\s*)?\s*(\{\s*(.*?)\s*\}))\s*\Z"),
    reg_origin_index=1,
    reg_key_index=3,
    reg_sub_content_index=(6,),
    reg_sub_content_type_names=(("enum_field", "explain", "explain2"),),
    sub_merge_type=(_APPEND, _REPLACE_EXPLAIN, _REPLACE_EXPLAIN),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=5,
)

GRAPHQL_ENUM_FIELD = BlockType(
    name="enum_field",
    reg_str=_re(r"(?s)^\s*((\w+)(\s*@[^\n]*)*)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    parent_names=("enum",),
    subs_separator="\n|,",
    sub_warp_char="()",
    reg_sub_warp_content_index=1,
    key_case_ignored=True,
)

GRAPHQL_EXPLAIN = BlockType(
    name="explain",
    reg_str=_re(r'(?s)\s*"""\s*([^\n]*)\s*\n(([^\n]*\s*\n)*)\s*"""\n\s*\Z'),
    reg_origin_index=0,
    reg_key_index=1,
)

GRAPHQL_EXPLAIN2 = BlockType(
    name="explain2",
    reg_str=_re(r'(?s)\s*"\s*([^\n]*)\s*"\n\s*\Z'),
    reg_origin_index=0,
    reg_key_index=1,
)


def new_graphql_parser() -> BlockParser:
    """A parser for GraphQL schema definitions."""
    return BlockParser(
        types=[
            GRAPHQL_TYPE,
            GRAPHQL_TYPE_FIELD,
            GRAPHQL_TYPE_FIELD_ARG,
            GRAPHQL_INPUT,
            GRAPHQL_INPUT_FIELD,
            GRAPHQL_ENUM,
            GRAPHQL_ENUM_FIELD,
            GRAPHQL_EXPLAIN,
            GRAPHQL_EXPLAIN2,
        ],
        pair_keys=["{}", "[]", "()", '""" """', '""'],
        head_viscous_pair_key=['""" """', '""'],
        origin_text=['""" """'],
        line_comment_key="#",
        pending_line_prefix="@",
    )