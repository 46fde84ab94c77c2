"""Tests for RFC 6962 inclusion proofs."""

import hashlib

import pytest

from tlogverify.tlog.merkle import InclusionProofError, leaf_hash, verify_inclusion


def node(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(b"\x01" + left + right).digest()


LEAVES = [leaf_hash(f"leaf-{i}".encode()) for i in range(3)]
# Three-leaf tree: root = H(H(l0, l1), l2)
ROOT = node(node(LEAVES[0], LEAVES[1]), LEAVES[2])


class TestInclusion:
    def test_single_leaf_tree(self):
        verify_inclusion(0, 1, LEAVES[0], [], LEAVES[0])

    def test_left_leaf(self):
        verify_inclusion(0, 3, LEAVES[0], [LEAVES[1], LEAVES[2]], ROOT)

    def test_middle_leaf(self):
        verify_inclusion(1, 3, LEAVES[1], [LEAVES[0], LEAVES[2]], ROOT)

    def test_last_leaf_on_border(self):
        verify_inclusion(2, 3, LEAVES[2], [node(LEAVES[0], LEAVES[1])], ROOT)

    def test_wrong_root(self):
        with pytest.raises(InclusionProofError, match="root mismatch"):
            verify_inclusion(0, 3, LEAVES[0], [LEAVES[1], LEAVES[2]], LEAVES[0])

    def test_wrong_proof_length(self):
        with pytest.raises(InclusionProofError, match="wrong proof size"):
            verify_inclusion(0, 3, LEAVES[0], [LEAVES[1]], ROOT)

    def test_index_out_of_range(self):
        with pytest.raises(InclusionProofError, match="out of range"):
            verify_inclusion(3, 3, LEAVES[0], [], ROOT)

