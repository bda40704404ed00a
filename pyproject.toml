[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "codemerge"
version = "0.1.0"
description = "Parse GraphQL schema and Protocol Buffers text into block trees and merge generated blocks into existing text."
requires-python = ">=3.10"
dependencies = []
keywords = ["graphql", "protobuf", "code generation", "merge", "schema"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["codemerge*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
