"""
Default (empty-subtree) digests for every level of a sparse Merkle tree.

A sparse tree only stores the nodes that differ from "nothing here". Every
other node holds the digest of a completely empty subtree rooted at its level:

- level 0: an empty leaf, the all-zero digest;
- level L: the parent of two empty subtrees of level L-1, i.e.
  `H(default[L-1] || default[L-1])`.

The table depends only on the depth and the hash function, so it is computed
once per pair and shared read-only by every tree, prover and verifier.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from sparse_merkle.types import ZERO_HASH, Bytes32, InvalidDepthError

from .constants import MAX_DEPTH, MIN_DEPTH
from .utils import Hasher, hash_nodes, keccak256

DefaultNodes = tuple[Bytes32, ...]
"""The default digest of each level, indexed by level (0 = leaves)."""


def validate_depth(depth: Any) -> int:
    """
    Check that `depth` can form a tree and return it as an `int`.

    Raises:
        InvalidDepthError: If `depth` is not an integer in `[MIN_DEPTH, MAX_DEPTH]`.
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidDepthError(depth, min_depth=MIN_DEPTH, max_depth=MAX_DEPTH)
    if not (MIN_DEPTH <= depth <= MAX_DEPTH):
        raise InvalidDepthError(depth, min_depth=MIN_DEPTH, max_depth=MAX_DEPTH)
    return int(depth)


def build_default_nodes(depth: int, hasher: Hasher = keccak256) -> DefaultNodes:
    """
    Build the default-node table for a tree of `depth` levels.

    Args:
        depth: Number of levels, including the leaf and root levels.
        hasher: The node hash function.

    Returns:
        A tuple of `depth` digests; entry `L` is the root of an empty subtree at level `L`.

    Raises:
        InvalidDepthError: If `depth` is outside `[MIN_DEPTH, MAX_DEPTH]`.
    """
    return _default_nodes(validate_depth(depth), hasher)


@lru_cache(maxsize=64)
def _default_nodes(depth: int, hasher: Hasher) -> DefaultNodes:
    nodes = [ZERO_HASH]
    for _ in range(1, depth):
        # Both children of an empty subtree are themselves empty subtrees.
        previous = nodes[-1]
        nodes.append(hash_nodes(previous, previous, hasher))
    return tuple(nodes)
