"""Property-based tests for tree building and proofs."""

from hypothesis import given
from hypothesis import strategies as st

from sparse_merkle.smt.proof import verify_proof
from sparse_merkle.smt.tree import SparseMerkleTree
from sparse_merkle.types import Bytes32

bytes32 = st.binary(min_size=32, max_size=32).map(Bytes32)


@st.composite
def trees(draw: st.DrawFn) -> tuple[SparseMerkleTree, dict[int, Bytes32]]:
    """Draw a small tree along with the leaves it was built from."""
    depth = draw(st.integers(min_value=2, max_value=10))
    capacity = 1 << (depth - 1)
    leaves = draw(
        st.dictionaries(
            st.integers(min_value=0, max_value=capacity - 1),
            bytes32,
            max_size=min(capacity, 12),
        )
    )
    return SparseMerkleTree.build(leaves, depth), leaves


@given(trees(), st.data())
def test_every_position_proves_its_value(
    drawn: tuple[SparseMerkleTree, dict[int, Bytes32]], data: st.DataObject
) -> None:
    tree, _ = drawn
    index = data.draw(st.integers(min_value=0, max_value=tree.capacity - 1))
    proof = tree.create_proof(index)

    assert len(proof) == 32 * (tree.depth - 1)
    assert verify_proof(index, tree.leaf(index), tree.root, proof)


@given(trees(), st.data(), bytes32)
def test_other_leaf_value_is_rejected(
    drawn: tuple[SparseMerkleTree, dict[int, Bytes32]], data: st.DataObject, other: Bytes32
) -> None:
    tree, _ = drawn
    index = data.draw(st.integers(min_value=0, max_value=tree.capacity - 1))
    proof = tree.create_proof(index)

    if other != tree.leaf(index):
        assert not verify_proof(index, other, tree.root, proof)


@given(trees(), st.data())
def test_tampered_proof_is_rejected(
    drawn: tuple[SparseMerkleTree, dict[int, Bytes32]], data: st.DataObject
) -> None:
    tree, _ = drawn
    index = data.draw(st.integers(min_value=0, max_value=tree.capacity - 1))
    proof = bytearray(tree.create_proof(index))
    offset = data.draw(st.integers(min_value=0, max_value=len(proof) - 1))
    proof[offset] ^= 0x01

    assert not verify_proof(index, tree.leaf(index), tree.root, bytes(proof))


@given(trees())
def test_insertion_order_does_not_matter(
    drawn: tuple[SparseMerkleTree, dict[int, Bytes32]],
) -> None:
    tree, leaves = drawn
    shuffled = dict(sorted(leaves.items(), reverse=True))
    assert SparseMerkleTree.build(shuffled, tree.depth).root == tree.root


@given(trees())
def test_only_stored_leaves_are_kept(
    drawn: tuple[SparseMerkleTree, dict[int, Bytes32]],
) -> None:
    tree, leaves = drawn
    assert len(tree) == len(leaves)
    for level, nodes in enumerate(tree.levels):
        assert len(nodes) <= len(leaves)
        assert all(int(index) < (tree.capacity >> level) for index in nodes)
