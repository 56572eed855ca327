"""Hashing and index helpers shared by the builder, the prover and the verifier."""

from __future__ import annotations

from typing import Any, Callable

from Crypto.Hash import keccak
from typing_extensions import Final

from sparse_merkle.types import Bytes32, IndexOutOfRangeError, Uint256

Hasher = Callable[[bytes], Bytes32]
"""A one-way function mapping an arbitrary byte string to a 32-byte digest."""

ZERO: Final = Uint256(0)
ONE: Final = Uint256(1)
TWO: Final = Uint256(2)


def keccak256(data: bytes) -> Bytes32:
    """
    Compute the Keccak-256 digest of `data`.

    This is the original Keccak padding used by Ethereum, not NIST SHA3-256.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return Bytes32(k.digest())


def hash_nodes(left: Bytes32, right: Bytes32, hasher: Hasher = keccak256) -> Bytes32:
    """Hashes two 32-byte nodes together as `hasher(left || right)`."""
    return Bytes32(hasher(left + right))


def is_left(index: Uint256) -> bool:
    """Even positions are left children, odd positions are right children."""
    return index % TWO == ZERO


def sibling_index(index: Uint256) -> Uint256:
    """Return the position sharing a parent with `index`."""
    return index + ONE if is_left(index) else index - ONE


def parent_index(index: Uint256) -> Uint256:
    """Return the position of the parent one level up."""
    return index // TWO


def leaf_capacity(depth: int) -> int:
    """
    Number of addressable leaf positions in a tree of `depth` levels.

    The root level holds a single node, so each level below doubles the
    positions: `2 ** (depth - 1)` at the leaf level.
    """
    return 1 << (depth - 1)


def to_index(value: Any, capacity: int) -> Uint256:
    """
    Coerce a caller-supplied leaf index to a `Uint256` below `capacity`.

    Raises:
        IndexOutOfRangeError: If `value` is not an integer or not in `[0, capacity)`.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise IndexOutOfRangeError(value, capacity)
    if not (0 <= int(value) < capacity):
        raise IndexOutOfRangeError(value, capacity)
    return value if isinstance(value, Uint256) else Uint256(value)
