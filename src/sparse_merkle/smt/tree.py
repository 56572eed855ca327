"""
Implements the fixed-depth sparse Merkle tree.

### Layout

A tree of depth `D` has `D` levels. Level 0 holds the leaves and level `D-1`
holds the single root node at position 0. A node at position `i` on level `L`
has two children on level `L-1`: the left child at `2*i` and the right child
at `2*i + 1`.

### Sparsity

The key space is huge (`2**256` leaf positions at the production depth) but
almost entirely empty. Each level is therefore stored as a sparse map holding
only the nodes that differ from the level's default digest, the root of an
empty subtree (see `defaults.py`). Reading a position that is absent from the
map yields that default, so the tree behaves exactly like a fully materialized
one while only ever touching `O(depth * number_of_leaves)` nodes.

### Immutability

A tree is built once from a complete leaf set. Its level maps are exposed as
read-only views and the tree object itself is frozen, so a single tree can be
shared between any number of concurrent provers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from sparse_merkle.types import Bytes32, TooManyLeavesError, Uint256

from .constants import DEFAULT_DEPTH
from .defaults import DefaultNodes, build_default_nodes, validate_depth
from .proof import MerkleProof, create_proof, open_proof, verify_proof
from .utils import (
    ZERO,
    Hasher,
    hash_nodes,
    is_left,
    keccak256,
    leaf_capacity,
    parent_index,
    sibling_index,
    to_index,
)

logger = logging.getLogger(__name__)

NodeLevel = Mapping[Uint256, Bytes32]
"""The non-default nodes of one level, keyed by position."""


def _coerce_leaves(leaves: Mapping[Any, Any], capacity: int) -> dict[Uint256, Bytes32]:
    """
    Validate leaf positions against `capacity` and leaf values as 32-byte digests.

    Raises:
        ValueError: If two keys name the same position, e.g. `1` and `Uint256(1)`.
    """
    coerced = {to_index(index, capacity): Bytes32(value) for index, value in leaves.items()}
    if len(coerced) != len(leaves):
        raise ValueError(
            f"Leaf positions must be unique, got {len(leaves)} keys for {len(coerced)} positions"
        )
    return coerced


def _build_parent_level(
    level: NodeLevel, default: Bytes32, hasher: Hasher
) -> dict[Uint256, Bytes32]:
    """
    Compute the non-default parents of one sparse level.

    Every stored node contributes to exactly one parent, equal to
    `H(left || right)` where a missing child is replaced by `default`.

    Positions are visited in ascending order, so the left child of a pair is
    always seen first. When both children are stored, the parent is computed
    once from the two real values while handling the left child, and the right
    child is skipped.
    """
    parents: dict[Uint256, Bytes32] = {}
    for index in sorted(level):
        parent = parent_index(index)
        if parent in parents:
            continue

        # Presence is checked explicitly; an absent sibling is the level default.
        sibling = level.get(sibling_index(index), default)
        node = level[index]
        if is_left(index):
            parents[parent] = hash_nodes(node, sibling, hasher)
        else:
            parents[parent] = hash_nodes(sibling, node, hasher)
    return parents


def build_levels(
    leaves: NodeLevel, default_nodes: DefaultNodes, hasher: Hasher = keccak256
) -> tuple[NodeLevel, ...]:
    """
    Build every sparse level from the leaves up to the root.

    Args:
        leaves: The validated leaf level.
        default_nodes: Default digest of each level; its length is the depth.
        hasher: The node hash function.

    Returns:
        One read-only map per level, level 0 first.
    """
    levels: list[NodeLevel] = [MappingProxyType(dict(leaves))]
    for level in range(len(default_nodes) - 1):
        parents = _build_parent_level(levels[-1], default_nodes[level], hasher)
        levels.append(MappingProxyType(parents))
    return tuple(levels)


@dataclass(frozen=True)
class SparseMerkleTree:
    """An immutable sparse Merkle tree with its default-node table and root."""

    # Level maps are read-only views, not hashable values.
    __hash__ = None  # type: ignore[assignment]

    depth: int
    """Number of levels, including the leaf level and the root level."""

    levels: tuple[NodeLevel, ...]
    """Sparse node maps, level 0 (leaves) first."""

    default_nodes: DefaultNodes
    """Default digest of each level."""

    root: Bytes32
    """The commitment to the whole leaf set."""

    hasher: Hasher = field(default=keccak256, compare=False, repr=False)
    """The node hash function the tree was built with."""

    @classmethod
    def build(
        cls,
        leaves: Mapping[Any, Any],
        depth: int = DEFAULT_DEPTH,
        hasher: Hasher = keccak256,
    ) -> SparseMerkleTree:
        """
        Build a tree from a sparse map of leaf positions to 32-byte leaf values.

        ### Construction Algorithm

        1.  **Defaults**: Look up the default digest of every level for `depth`.

        2.  **Validation**: Reject leaf sets larger than the key space, then
            coerce each position to a `Uint256` below the capacity and each
            value to a `Bytes32`.

        3.  **Bottom-Up Iteration**: For each level, hash every present node
            with its sibling (or the level default when the sibling is absent)
            to produce the sparse map of the level above.

        4.  **Root**: The root is the position-0 node of the top level, or the
            top level default when no leaves were supplied.

        Args:
            leaves: Leaf positions (ints or `Uint256`) mapped to 32-byte values.
            depth: Number of levels, including the leaf and root levels.
            hasher: The node hash function.

        Returns:
            The fully built, immutable tree.

        Raises:
            InvalidDepthError: If `depth` cannot form a tree.
            TooManyLeavesError: If more leaves are given than positions exist.
            IndexOutOfRangeError: If a leaf position is not addressable at `depth`.
            ValueError: If a leaf value is not 32 bytes long, or two keys name the
                same position.
        """
        depth = validate_depth(depth)
        default_nodes = build_default_nodes(depth, hasher)

        capacity = leaf_capacity(depth)
        if len(leaves) > capacity:
            raise TooManyLeavesError(len(leaves), capacity)

        levels = build_levels(_coerce_leaves(leaves, capacity), default_nodes, hasher)

        top = levels[-1]
        assert all(index == ZERO for index in top), "top level must only hold position 0"
        root = top.get(ZERO, default_nodes[-1])

        logger.debug(
            "Built sparse Merkle tree: depth=%d leaves=%d root=0x%s",
            depth,
            len(levels[0]),
            root.hex(),
        )
        return cls(
            depth=depth,
            levels=levels,
            default_nodes=default_nodes,
            root=root,
            hasher=hasher,
        )

    @property
    def capacity(self) -> int:
        """Number of addressable leaf positions."""
        return leaf_capacity(self.depth)

    @property
    def leaves(self) -> NodeLevel:
        """The stored (non-default) leaves."""
        return self.levels[0]

    def node(self, level: int, index: Any) -> Bytes32:
        """
        Return the node at `index` on `level`, falling back to the level default.

        Raises:
            IndexOutOfRangeError: If `index` is not a position on `level`.
        """
        position = to_index(index, self.capacity >> level)
        return self.levels[level].get(position, self.default_nodes[level])

    def leaf(self, index: Any) -> Bytes32:
        """
        Return the leaf value at `index`, or the empty-leaf digest if unset.

        Raises:
            IndexOutOfRangeError: If `index` is not addressable in this tree.
        """
        return self.node(0, index)

    def create_proof(self, index: Any) -> bytes:
        """Return the concatenated sibling path for the leaf at `index`."""
        return create_proof(self, index)

    def open(self, index: Any) -> MerkleProof:
        """Return the structured proof for the leaf at `index`."""
        return open_proof(self, index)

    def verify(self, index: Any, leaf: Bytes32, proof: bytes) -> bool:
        """Check `proof` for `leaf` at `index` against this tree's root."""
        return verify_proof(index, leaf, self.root, proof, self.hasher)

    def __len__(self) -> int:
        """Number of explicitly stored leaves."""
        return len(self.levels[0])

    def __contains__(self, index: object) -> bool:
        """Whether a leaf was explicitly stored at `index`."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not (0 <= int(index) < self.capacity):
            return False
        return Uint256(index) in self.levels[0]
