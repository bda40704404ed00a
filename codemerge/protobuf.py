"""Block types and parser for Protocol Buffers definitions."""

from __future__ import annotations

import re

from .block_type import BlockType, MergeConfig
from .parser import BlockParser


def _re(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.ASCII)


_APPEND = MergeConfig(append=True)

PROTO_IMPORT = BlockType(
    name="import",
    reg_str=_re(r"(?s)^\s*(import\s*(.+?);?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_warp_content_index=1,
)

PROTO_PACKAGE = BlockType(
    name="package",
    reg_str=_re(r"(?s)^\s*(package\s*(.+?);?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_warp_content_index=1,
)

PROTO_SYNTAX = BlockType(
    name="syntax",
    reg_str=_re(r"(?s)^\s*(syntax\s*=\s*(.+?);?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_warp_content_index=1,
)

PROTO_SERVICE = BlockType(
    name="service",
    reg_str=_re(r"(?s)^\s*(service\s+(\w+)\s*(\{\s?(.*?\n?)\s*\}\n?))\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_content_index=(4,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(_APPEND,),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=3,
    sub_tail_char=(";", "}"),
)

PROTO_RPC = BlockType(
    name="rpc",
    reg_str=_re(
        r"(?s)^\s*(rpc\s+(\w+)\s*\(.*?\)\s*returns\s*\(.*?\)\s*(\{\n?(\s*.*?\n?)\s*\})?\s*?;?\n?(\s*//.*)?)\s*\Z"
    ),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_content_index=(4,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(None,),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=3,
)

PROTO_MESSAGE = BlockType(
    name="message",
    reg_str=_re(r"(?s)^\s*(message\s+(\w+)\s*(\{\n?(.*?\n?)\s*\})\s*?;?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_content_index=(4,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(_APPEND,),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=3,
)

PROTO_MESSAGE_FIELD = BlockType(
    name="message_field",
    reg_str=_re(
        r"(?s)\s*((optional)?(repeated)?\s*([a-zA-Z0-9.<>, ]+)?\s+(\w+)\s*=\s*(\d+)\s*(\[(.*?)\])?;?\n?(\s*//.*)?)\s*?"
    ),
    reg_origin_index=1,
    reg_key_index=5,
    reg_sub_content_index=(8,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(_APPEND,),
    subs_separator=",|\n",
    sub_warp_char="[]",
    reg_sub_warp_content_index=7,
)

PROTO_OPTION = BlockType(
    name="option",
    reg_str=_re(r"(?s)^\s*(option\s+(.+?)\s*=\s*(\{?\s*(.*?)\s*\}?)?\s*?;?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_content_index=(4,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(_APPEND,),
    subs_separator=",",
    sub_warp_char="{}",
    reg_sub_warp_content_index=3,
)

PROTO_OPTION_ITEM = BlockType(
    name="option_item",
    reg_str=_re(r"(?s)(\s*(\w+)\s*[:=]\s*([^,]+))\s*"),
    reg_origin_index=1,
    reg_key_index=2,
    parent_names=("option", "message_field"),
)

PROTO_OPTION_ITEM2 = BlockType(
    name="option_item2",
    reg_str=_re(r'(?s)\s*("([^\n]*)")\s*\Z'),
    reg_origin_index=1,
    reg_key_index=2,
    parent_names=("option", "message_field"),
)

PROTO_ENUM = BlockType(
    name="enum",
    reg_str=_re(r"(?s)^\s*(enum\s*(.+?)\s*(\{\s*(.*)\s*\})\s*?;?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_content_index=(4,),
    reg_sub_content_type_names=(None,),
    sub_merge_type=(_APPEND,),
    subs_separator="\n",
    sub_warp_char="{}",
    reg_sub_warp_content_index=3,
)

PROTO_ENUM_ITEM = BlockType(
    name="enum_item",
    reg_str=_re(r"(?s)\s*((\w+)\s*[:=]\s*(\S+))\s*"),
    reg_origin_index=1,
    reg_key_index=2,
    parent_names=("enum",),
    reg_sub_warp_content_index=1,
)

PROTO_RESERVED = BlockType(
    name="reserved",
    reg_str=_re(r"(?s)^\s*(reserved\s*(.+?);?\n?)\s*\Z"),
    reg_origin_index=1,
    reg_key_index=2,
    reg_sub_warp_content_index=1,
)


def new_protobuf_parser() -> BlockParser:
    """A parser for Protocol Buffers definitions."""
    return BlockParser(
        types=[
            PROTO_IMPORT,
            PROTO_PACKAGE,
            PROTO_SYNTAX,
            PROTO_SERVICE,
            PROTO_RPC,
            PROTO_MESSAGE,
            PROTO_MESSAGE_FIELD,
            PROTO_OPTION,
            PROTO_OPTION_ITEM,
            PROTO_OPTION_ITEM2,
            PROTO_ENUM,
            PROTO_ENUM_ITEM,
            PROTO_RESERVED,
        ],
        pair_keys=["{}", "[]", "()"],
        line_comment_key="//",
    )