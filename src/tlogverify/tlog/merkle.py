"""RFC 6962 Merkle inclusion proof verification."""

import hashlib

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


class InclusionProofError(Exception):
    pass


def leaf_hash(leaf: bytes) -> bytes:
    return hashlib.sha256(LEAF_PREFIX + leaf).digest()


def _hash_children(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(NODE_PREFIX + left + right).digest()


def root_from_inclusion_proof(
    index: int, tree_size: int, leaf: bytes, proof: list[bytes]
) -> bytes:
    """Recompute the tree root from a leaf hash and its audit path."""
    if index < 0 or index >= tree_size:
        raise InclusionProofError(f"index {index} out of range for tree size {tree_size}")

    # The path splits into the inner part (below where index and the last
    # leaf diverge) and the border part along the right edge of the tree.
    inner = (index ^ (tree_size - 1)).bit_length()
    border = bin(index >> inner).count("1")
    if len(proof) != inner + border:
        raise InclusionProofError(
            f"wrong proof size: expected {inner + border} hashes, got {len(proof)}"
        )

    node = leaf
    for i, sibling in enumerate(proof[:inner]):
        if (index >> i) & 1:
            node = _hash_children(sibling, node)
        else:
            node = _hash_children(node, sibling)
    for sibling in proof[inner:]:
        node = _hash_children(sibling, node)
    return node


def verify_inclusion(
    index: int, tree_size: int, leaf: bytes, proof: list[bytes], root: bytes
) -> None:
    """Raise InclusionProofError unless ``leaf`` (a leaf hash) is in the tree with ``root``."""
    computed = root_from_inclusion_proof(index, tree_size, leaf, proof)
    if computed != root:
        raise InclusionProofError(
            f"root mismatch: computed {computed.hex()}, expected {root.hex()}"
        )
