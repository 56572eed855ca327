"""Exception hierarchy for sparse Merkle tree construction and proofs."""

from __future__ import annotations

from typing import Any


class MerkleError(Exception):
    """
    Base exception for all sparse Merkle tree errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidDepthError(MerkleError):
    """
    Raised when a tree depth cannot form a valid tree.

    A tree needs at least a leaf level and a root level, and the leaf indices
    of the deepest supported tree must still fit in a `Uint256`.

    Attributes:
        depth: The rejected depth.
        min_depth: The smallest accepted depth (inclusive).
        max_depth: The largest accepted depth (inclusive).
    """

    def __init__(self, depth: Any, *, min_depth: int, max_depth: int) -> None:
        self.depth = depth
        self.min_depth = min_depth
        self.max_depth = max_depth

        super().__init__(
            f"Invalid tree depth {depth!r} (valid range: [{min_depth}, {max_depth}])"
        )


class TooManyLeavesError(MerkleError):
    """
    Raised when more leaves are supplied than the tree can address.

    Attributes:
        count: The number of supplied leaves.
        capacity: The number of addressable leaf positions.
    """

    def __init__(self, count: int, capacity: int) -> None:
        self.count = count
        self.capacity = capacity

        super().__init__(f"Tree can hold at most {capacity} leaves, got {count}")


class IndexOutOfRangeError(MerkleError):
    """
    Raised when a leaf index is not addressable at the tree's depth.

    Attributes:
        index: The offending index (as supplied by the caller).
        capacity: The number of addressable leaf positions.
    """

    def __init__(self, index: Any, capacity: int) -> None:
        self.index = index
        self.capacity = capacity

        index_repr = repr(index)
        if len(index_repr) > 80:
            index_repr = index_repr[:77] + "..."

        super().__init__(f"Leaf index {index_repr} is out of range [0, {capacity})")


class ProofLengthMismatchError(MerkleError):
    """
    Raised when a proof buffer is malformed for the expected tree depth.

    Attributes:
        expected: The expected length in bytes, or None if only alignment is checked.
        actual: The length of the supplied buffer in bytes.
    """

    def __init__(self, *, expected: int | None, actual: int) -> None:
        self.expected = expected
        self.actual = actual

        if expected is None:
            msg = f"Proof must be a non-empty multiple of 32 bytes, got {actual} bytes"
        else:
            msg = f"Proof must be exactly {expected} bytes, got {actual}"

        super().__init__(msg)
