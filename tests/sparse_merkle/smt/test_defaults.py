"""Tests for the default-node table."""

from typing import Any

import pytest

from sparse_merkle.smt.constants import MAX_DEPTH, MIN_DEPTH
from sparse_merkle.smt.defaults import _default_nodes, build_default_nodes, validate_depth
from sparse_merkle.smt.utils import hash_nodes, keccak256
from sparse_merkle.types import ZERO_HASH, Bytes32, InvalidDepthError
from tests.sparse_merkle.helpers import sha256_hasher

# First entries of the well-known Keccak-256 zero-hash chain.
KNOWN_DEFAULTS = [
    ZERO_HASH,
    Bytes32("ad3228b676f7d3cd4284a5443f17f1962b36e491b30a40b2405849e597ba5fb5"),
    Bytes32("b4c11951957c6f8f642c4af61cd6b24640fec6dc7fc607ee8206a99e92410d30"),
]


@pytest.mark.parametrize("depth", [2, 3, 8, 64, MAX_DEPTH])
def test_default_chain(depth: int) -> None:
    """Level 0 is the zero digest; every other level hashes two copies of the one below."""
    nodes = build_default_nodes(depth)

    assert len(nodes) == depth
    assert nodes[0] == ZERO_HASH
    for level in range(1, depth):
        assert nodes[level] == keccak256(nodes[level - 1] + nodes[level - 1])


def test_known_keccak_defaults() -> None:
    assert list(build_default_nodes(3)) == KNOWN_DEFAULTS


def test_prefix_is_shared_between_depths() -> None:
    """The table only depends on the level, so a shallow table prefixes a deep one."""
    assert build_default_nodes(257)[:10] == build_default_nodes(10)


def test_table_is_memoized_and_immutable() -> None:
    first = build_default_nodes(32)
    assert build_default_nodes(32) is first
    assert isinstance(first, tuple)


def test_custom_hasher_gets_its_own_table() -> None:
    nodes = build_default_nodes(4, sha256_hasher)
    assert nodes[0] == ZERO_HASH
    assert nodes[1] == hash_nodes(ZERO_HASH, ZERO_HASH, sha256_hasher)
    assert nodes[1] != build_default_nodes(4)[1]


@pytest.mark.parametrize("depth", [-1, 0, 1, MAX_DEPTH + 1, 1000])
def test_invalid_depth_raises(depth: int) -> None:
    with pytest.raises(InvalidDepthError) as exc_info:
        build_default_nodes(depth)
    assert exc_info.value.depth == depth
    assert exc_info.value.min_depth == MIN_DEPTH
    assert exc_info.value.max_depth == MAX_DEPTH


@pytest.mark.parametrize("depth", ["8", 8.0, True, None])
def test_non_integer_depth_raises(depth: Any) -> None:
    with pytest.raises(InvalidDepthError):
        validate_depth(depth)


def test_validate_depth_bounds() -> None:
    assert validate_depth(MIN_DEPTH) == MIN_DEPTH
    assert validate_depth(MAX_DEPTH) == MAX_DEPTH


def test_cache_is_bounded_for_throwaway_hashers() -> None:
    for _ in range(100):
        build_default_nodes(3, lambda data: keccak256(data))

    info = _default_nodes.cache_info()
    assert info.maxsize is not None
    assert info.currsize <= info.maxsize
