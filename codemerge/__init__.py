"""Block parsing and merging for GraphQL schema and Protocol Buffers text."""

__version__ = "0.1.0"
__all__ = ["block", "block_type", "graphql", "pair_count", "parser", "protobuf"]