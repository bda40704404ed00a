# codemerge

`codemerge` splits GraphQL schema text and Protocol Buffers definitions into a tree of
blocks: types, inputs, enums, fields, arguments, messages, services, rpcs, options and
doc strings. It then merges a newly generated tree into an existing one. The existing
text keeps its own layout and hand-written parts. New sub blocks are appended with the
separator the existing text already uses. Doc strings are replaced by the incoming ones.

It is meant for code generators that write into files people also edit by hand.

## Installation

```
pip install .
```

## Merging GraphQL

```python
from codemerge.graphql import new_graphql_parser

parser = new_graphql_parser()

existing = parser.parse("""
type GameEntry implements Node {
  id: ID!
  name: String!
}
""")

generated = parser.parse("""
\"\"\"
GameEntry type
\"\"\"
type GameEntry {
  test: Int!
}
""")

merged = existing.merge(0, generated)
print(merged.origin_string)
```

The merged text keeps `implements Node` and the existing fields, puts the incoming doc
string in front of the type and appends `test: Int!` after `name`. Fields that already
exist are matched by name, ignoring case, and are left as they are apart from their doc
strings. Types that do not exist yet are appended at the end.

## Merging Protocol Buffers

```python
from codemerge.protobuf import new_protobuf_parser

parser = new_protobuf_parser()
existing = parser.parse("""
message UpdateGameDetailByGameIDResponse {
}
""")
generated = parser.parse("""
message UpdateGameDetailByGameIDResponse {
	repeated AssetTokenConfig asset_token_config = 1 [ds_rpc: true, lua_export: true];
}
""")
print(existing.merge(0, generated).origin_string)
```

Fields are appended to messages, and items inside a field's `[...]` options are
appended to the options the field already has.

## Concepts

- `BlockParser` (in `codemerge.parser`) holds a list of `BlockType` rules tried in
  order. `parse(content)` returns a root `Block` whose single sub level holds the
  top-level blocks. Text is cut into chunks line by line, using `PairCount` (in
  `codemerge.pair_count`) to wait until brackets and quotes are balanced; each chunk is
  matched against the rules by `block_from_string`. Chunks that match no rule are
  reported through the `logging` module and skipped.
- `BlockType` and `MergeConfig` (in `codemerge.block_type`) describe one kind of block:
  its regular expression, which group holds the key, which groups hold sub contents, and
  for each sub level whether incoming blocks are appended or replace existing blocks of
  the given type names.
- `Block` (in `codemerge.block`) is one node of the tree. It keeps its original text in
  `origin_string` and the text of each sub level in `sub_origin_strings`, so merging
  edits the text rather than rebuilding it. `merge`, `add_sub`, `del_sub`, `replace_sub`,
  `find`, `sub_join_string` and `clone` work on the tree. Two blocks compare equal when
  their key, type, text and sub blocks are equal.
- `new_graphql_parser()` (in `codemerge.graphql`) and `new_protobuf_parser()` (in
  `codemerge.protobuf`) build parsers with the rules for each language.

`add_sub` and `del_sub` raise `ValueError` when a block cannot be placed in or removed
from the text, and `pair_key_split` raises `ValueError` for a malformed pair key.

## What it does not do

`codemerge` works on strings only: it has no command-line tool and does not read or
write files. Load the existing and generated text yourself, merge, and write
`origin_string` back.

## Running the tests

```
pip install .[test]
pytest
```