"""
Inclusion proofs for the sparse Merkle tree.

A proof for the leaf at position `i` is the list of sibling digests met while
climbing from that leaf to the root, one per level below the root. On the wire
it is simply the concatenation of those 32-byte siblings, leaf level first, so
a proof for a tree of depth `D` is exactly `32 * (D - 1)` bytes.

Verification never touches a tree. Starting from the leaf value, each sibling
is hashed on the correct side (the position's lowest bit says whether the
current node is a left or a right child) and the final digest is compared to
the claimed root.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from pydantic import Field, model_validator

from sparse_merkle.types import (
    Bytes32,
    ProofLengthMismatchError,
    StrictBaseModel,
    Uint256,
)

from .constants import MAX_DEPTH, NODE_SIZE
from .defaults import validate_depth
from .utils import (
    Hasher,
    hash_nodes,
    is_left,
    keccak256,
    leaf_capacity,
    parent_index,
    sibling_index,
    to_index,
)

if TYPE_CHECKING:
    from .tree import SparseMerkleTree


class MerkleProof(StrictBaseModel):
    """
    A single-leaf inclusion proof together with the position it opens.

    This object is immutable; once created, its contents cannot be changed.
    """

    index: Uint256 = Field(..., description="The position of the proven leaf.")

    siblings: list[Bytes32] = Field(
        ..., description="Sibling digests from the leaf level up to the level below the root."
    )

    @model_validator(mode="after")
    def check_siblings_length(self) -> MerkleProof:
        """Ensures the proof describes a tree of a supported depth."""
        if not (1 <= len(self.siblings) <= MAX_DEPTH - 1):
            raise ValueError(
                f"A proof must hold between 1 and {MAX_DEPTH - 1} siblings, "
                f"got {len(self.siblings)}"
            )
        if int(self.index) >= leaf_capacity(self.depth):
            raise ValueError("The index is not addressable by a proof of this length.")
        return self

    @property
    def depth(self) -> int:
        """Depth of the tree this proof was generated from."""
        return len(self.siblings) + 1

    @classmethod
    def from_bytes(cls, index: Any, data: bytes, depth: int | None = None) -> MerkleProof:
        """
        Parse a concatenated proof buffer.

        Args:
            index: The position of the proven leaf.
            data: The concatenated sibling digests.
            depth: When given, the buffer must be exactly `32 * (depth - 1)` bytes.

        Raises:
            ProofLengthMismatchError: If the buffer is malformed for `depth`.
            IndexOutOfRangeError: If `index` is not addressable at the proof's depth.
        """
        if depth is not None:
            expected = NODE_SIZE * (validate_depth(depth) - 1)
            if len(data) != expected:
                raise ProofLengthMismatchError(expected=expected, actual=len(data))
        elif len(data) == 0 or len(data) % NODE_SIZE != 0:
            raise ProofLengthMismatchError(expected=None, actual=len(data))

        siblings = Bytes32.chunks(bytes(data))
        position = to_index(index, leaf_capacity(len(siblings) + 1))
        return cls(index=position, siblings=siblings)

    def to_bytes(self) -> bytes:
        """Concatenate the siblings into the wire form of the proof."""
        return b"".join(self.siblings)

    def calculate_root(self, leaf: Bytes32, hasher: Hasher = keccak256) -> Bytes32:
        """Recompute the root implied by this proof for `leaf`."""
        return _fold(self.index, Bytes32(leaf), self.siblings, hasher)

    def verify(self, leaf: Bytes32, root: Bytes32, hasher: Hasher = keccak256) -> bool:
        """Verifies the proof for `leaf` against a known root."""
        return self.calculate_root(leaf, hasher) == Bytes32(root)


def _fold(
    position: Uint256, leaf: Bytes32, siblings: Sequence[Bytes32], hasher: Hasher
) -> Bytes32:
    """Climb from `leaf` to the root, hashing in one sibling per level."""
    computed = leaf
    for sibling in siblings:
        # Even positions are left children, so the sibling goes on the right.
        if is_left(position):
            computed = hash_nodes(computed, sibling, hasher)
        else:
            computed = hash_nodes(sibling, computed, hasher)
        position = parent_index(position)
    return computed


def collect_siblings(tree: SparseMerkleTree, index: Any) -> list[Bytes32]:
    """
    Collect the sibling of each node on the path from a leaf to the root.

    ### Path Generation Algorithm

    The algorithm "climbs" the tree from the leaf level to the level below the
    root. At each level it takes the sibling of the current position: the
    stored node if there is one, otherwise the level's default digest. It then
    moves up to the parent's position for the next level.

    Raises:
        IndexOutOfRangeError: If `index` is not addressable in `tree`.
    """
    position = to_index(index, tree.capacity)
    siblings: list[Bytes32] = []
    for level in range(tree.depth - 1):
        siblings.append(tree.node(level, sibling_index(position)))
        position = parent_index(position)
    return siblings


def create_proof(tree: SparseMerkleTree, index: Any) -> bytes:
    """
    Generate the proof buffer for the leaf at `index`.

    Returns:
        The `32 * (depth - 1)` byte concatenation of siblings, leaf level first.

    Raises:
        IndexOutOfRangeError: If `index` is not addressable in `tree`.
    """
    return b"".join(collect_siblings(tree, index))


def open_proof(tree: SparseMerkleTree, index: Any) -> MerkleProof:
    """Generate the structured proof for the leaf at `index`."""
    position = to_index(index, tree.capacity)
    return MerkleProof(index=position, siblings=collect_siblings(tree, position))


def verify_proof(
    index: Any,
    leaf: Bytes32,
    claimed_root: Bytes32,
    proof: bytes,
    hasher: Hasher = keccak256,
) -> bool:
    """
    Check that `leaf` sits at `index` under `claimed_root`.

    The check is independent of any built tree and mirrors the builder's
    convention exactly: an even position is the left child of its parent.

    Args:
        index: The position of the leaf.
        leaf: The 32-byte leaf value.
        claimed_root: The trusted root.
        proof: The concatenated sibling digests, leaf level first.
        hasher: The node hash function.

    Returns:
        `True` if the proof reconstructs `claimed_root`. `False` if it does not,
        if the proof is empty or not a multiple of 32 bytes, or if `index` is
        not a non-negative 256-bit integer.
    """
    if len(proof) == 0 or len(proof) % NODE_SIZE != 0:
        return False
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    if not (0 <= int(index) < 2**Uint256.BITS):
        return False

    siblings = Bytes32.chunks(bytes(proof))
    return _fold(Uint256(index), Bytes32(leaf), siblings, hasher) == Bytes32(claimed_root)


def verify_proof_for_depth(
    index: Any,
    leaf: Bytes32,
    claimed_root: Bytes32,
    proof: bytes,
    depth: int,
    hasher: Hasher = keccak256,
) -> bool:
    """
    Verify a proof that must come from a tree of exactly `depth` levels.

    Unlike `verify_proof`, a malformed proof is reported as an error rather
    than folded into a `False` result, so callers can tell "this proof is
    broken" apart from "this proof does not match the root".

    Raises:
        InvalidDepthError: If `depth` cannot form a tree.
        ProofLengthMismatchError: If the proof is not `32 * (depth - 1)` bytes.
        IndexOutOfRangeError: If `index` is not addressable at `depth`.
    """
    depth = validate_depth(depth)
    expected = NODE_SIZE * (depth - 1)
    if len(proof) != expected:
        raise ProofLengthMismatchError(expected=expected, actual=len(proof))

    to_index(index, leaf_capacity(depth))
    return verify_proof(index, leaf, claimed_root, proof, hasher)
