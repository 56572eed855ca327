"""Reusable type definitions for the sparse Merkle tree."""

from .base import StrictBaseModel
from .byte_arrays import ZERO_HASH, BaseBytes, Bytes32
from .exceptions import (
    IndexOutOfRangeError,
    InvalidDepthError,
    MerkleError,
    ProofLengthMismatchError,
    TooManyLeavesError,
)
from .uint import BaseUint, Uint256

__all__ = [
    # Core types
    "Uint256",
    "BaseUint",
    "Bytes32",
    "BaseBytes",
    "ZERO_HASH",
    "StrictBaseModel",
    # Exceptions
    "MerkleError",
    "InvalidDepthError",
    "TooManyLeavesError",
    "IndexOutOfRangeError",
    "ProofLengthMismatchError",
]
