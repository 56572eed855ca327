"""Builders and reference vectors shared across the test suite."""

from __future__ import annotations

import hashlib
from typing import Iterable

from sparse_merkle.types import Bytes32

FIXTURE_DEPTH = 257
"""Depth of the reference tree (a full 256-bit key space)."""

FIXTURE_LEAF = Bytes32("0x0101010101010101010101010101010101010101010101010101010101010101")
"""Value stored at every leaf of the reference tree."""

FIXTURE_LEAVES = {1: FIXTURE_LEAF, 2: FIXTURE_LEAF, 3: FIXTURE_LEAF, 4: FIXTURE_LEAF}
"""The reference tree: four identical leaves at positions 1 through 4."""

FIXTURE_ROOT = Bytes32("0x48ce19d92fe8d6b4be1d7744c1a798bde5d7f12ad192fe520aeae0462f3df29e")
"""Known root of the reference tree."""


def make_bytes32(seed: int) -> Bytes32:
    """Create a deterministic, non-zero 32-byte value from a seed."""
    return Bytes32(hashlib.sha256(seed.to_bytes(8, "big")).digest())


def make_leaves(indices: Iterable[int]) -> dict[int, Bytes32]:
    """Map each index to a distinct deterministic leaf value."""
    return {index: make_bytes32(index) for index in indices}


def sha256_hasher(data: bytes) -> Bytes32:
    """An alternative node hash used to exercise the pluggable hasher."""
    return Bytes32(hashlib.sha256(data).digest())
