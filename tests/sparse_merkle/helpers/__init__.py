"""Test helpers for sparse_merkle unit tests."""

from .builders import (
    FIXTURE_DEPTH,
    FIXTURE_LEAF,
    FIXTURE_LEAVES,
    FIXTURE_ROOT,
    make_bytes32,
    make_leaves,
    sha256_hasher,
)

__all__ = [
    "FIXTURE_DEPTH",
    "FIXTURE_LEAF",
    "FIXTURE_LEAVES",
    "FIXTURE_ROOT",
    "make_bytes32",
    "make_leaves",
    "sha256_hasher",
]
