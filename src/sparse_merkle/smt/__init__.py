"""Sparse Merkle tree: default nodes, tree building, proofs and verification."""

from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_DEPTH,
    MAX_DEPTH,
    MIN_DEPTH,
    NODE_SIZE,
    PROD_CONFIG,
    TEST_CONFIG,
    TreeConfig,
)
from .defaults import DefaultNodes, build_default_nodes, validate_depth
from .proof import (
    MerkleProof,
    create_proof,
    open_proof,
    verify_proof,
    verify_proof_for_depth,
)
from .tree import NodeLevel, SparseMerkleTree, build_levels
from .utils import Hasher, hash_nodes, keccak256, leaf_capacity

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DEPTH",
    "DefaultNodes",
    "Hasher",
    "MAX_DEPTH",
    "MIN_DEPTH",
    "MerkleProof",
    "NODE_SIZE",
    "NodeLevel",
    "PROD_CONFIG",
    "SparseMerkleTree",
    "TEST_CONFIG",
    "TreeConfig",
    "build_default_nodes",
    "build_levels",
    "create_proof",
    "hash_nodes",
    "keccak256",
    "leaf_capacity",
    "open_proof",
    "validate_depth",
    "verify_proof",
    "verify_proof_for_depth",
]
