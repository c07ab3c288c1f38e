"""Shared type definitions for tabby."""

from typing import Literal

# Which pipeline entry point produced a build
type BuildMode = Literal["production", "dev", "dev-incremental"]

# Content path relative to the content root, POSIX separators (manifest key)
type SourceKey = str

# Lowercase hex SHA-256 digest
type Digest = str

# Manifest: source key -> content digest
type Manifest = dict[SourceKey, Digest]
