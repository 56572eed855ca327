"""Fixed-depth sparse Merkle trees with compact inclusion proofs."""

from .smt import (
    DEFAULT_DEPTH,
    MerkleProof,
    SparseMerkleTree,
    build_default_nodes,
    create_proof,
    keccak256,
    verify_proof,
    verify_proof_for_depth,
)
from .types import (
    ZERO_HASH,
    Bytes32,
    IndexOutOfRangeError,
    InvalidDepthError,
    MerkleError,
    ProofLengthMismatchError,
    TooManyLeavesError,
    Uint256,
)

__all__ = [
    "DEFAULT_DEPTH",
    "ZERO_HASH",
    "Bytes32",
    "Uint256",
    "MerkleProof",
    "SparseMerkleTree",
    "build_default_nodes",
    "create_proof",
    "keccak256",
    "verify_proof",
    "verify_proof_for_depth",
    "MerkleError",
    "InvalidDepthError",
    "TooManyLeavesError",
    "IndexOutOfRangeError",
    "ProofLengthMismatchError",
]
