"""Tests for the sparse Merkle error hierarchy."""

import pytest

from sparse_merkle.types import (
    IndexOutOfRangeError,
    InvalidDepthError,
    MerkleError,
    ProofLengthMismatchError,
    TooManyLeavesError,
)


@pytest.mark.parametrize(
    "error",
    [
        InvalidDepthError(1, min_depth=2, max_depth=257),
        TooManyLeavesError(5, 4),
        IndexOutOfRangeError(9, 8),
        ProofLengthMismatchError(expected=64, actual=32),
    ],
    ids=["depth", "leaves", "index", "proof"],
)
def test_all_errors_share_the_base_class(error: MerkleError) -> None:
    assert isinstance(error, MerkleError)
    assert isinstance(error, Exception)
    assert str(error) == error.message
    assert repr(error).startswith(type(error).__name__)


def test_invalid_depth_attributes() -> None:
    error = InvalidDepthError(300, min_depth=2, max_depth=257)
    assert (error.depth, error.min_depth, error.max_depth) == (300, 2, 257)
    assert "300" in error.message
    assert "[2, 257]" in error.message


def test_too_many_leaves_attributes() -> None:
    error = TooManyLeavesError(5, 4)
    assert (error.count, error.capacity) == (5, 4)
    assert error.message == "Tree can hold at most 4 leaves, got 5"


def test_index_out_of_range_truncates_huge_indices() -> None:
    error = IndexOutOfRangeError(2**1000, 2**256)
    assert error.index == 2**1000
    assert "..." in error.message


def test_proof_length_mismatch_messages() -> None:
    exact = ProofLengthMismatchError(expected=64, actual=31)
    assert exact.message == "Proof must be exactly 64 bytes, got 31"

    aligned = ProofLengthMismatchError(expected=None, actual=31)
    assert aligned.expected is None
    assert "multiple of 32" in aligned.message
