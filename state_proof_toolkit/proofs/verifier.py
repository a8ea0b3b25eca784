"""Merkle-Patricia proof walk"""

from typing import Optional, Sequence

from eth_utils import keccak

from state_proof_toolkit.proofs.nibbles import to_nibbles
from state_proof_toolkit.proofs.nodes import BranchNode, EmptyNode, decode_node
from state_proof_toolkit.proofs.types import NodeKind
from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.shared.exceptions import ProofError
from state_proof_toolkit.shared.logging import get_logger

_logger = get_logger(__name__)


def _log_trailing(proof: Sequence[bytes], depth: int) -> None:
    unused = len(proof) - depth - 1
    if unused > 0:
        _logger.debug(
            "Walk ended at node %d, ignoring %d trailing proof node(s)",
            depth,
            unused,
        )


def verify_proof(
    root_hash: bytes, key: bytes, proof: Sequence[bytes]
) -> Optional[bytes]:
    """
    Walk a proof from the root and return the value stored under ``key``.

    ``key`` is the trie path itself: secure tries expect the caller to pass
    keccak(address) or keccak(slot). Every node is hash checked against the
    link that led to it before its bytes are decoded.

    Args:
        root_hash (bytes): Trusted 32-byte trie root.
        key (bytes): Trie path.
        proof (Sequence[bytes]): RLP-encoded nodes, root first.

    Returns:
        Optional[bytes]: The stored value, or None when the proof shows the
            key is absent.

    Raises:
        ProofError: The proof is malformed, inconsistent, or does not chain
            to ``root_hash``.
        ValueError: ``root_hash`` is not 32 bytes.
    """
    expected_hash = bytes(root_hash)
    if len(expected_hash) != TrieConstants.HASH_LENGTH:
        raise ValueError(
            f"Root hash must be {TrieConstants.HASH_LENGTH} bytes, "
            f"got {len(expected_hash)}"
        )

    if not proof and expected_hash == TrieConstants.EMPTY_TRIE_ROOT:
        _logger.debug("Empty proof against the empty trie root: key absent")
        return None

    key_nibbles = to_nibbles(key)
    cursor = 0

    for depth, node_data in enumerate(proof):
        actual_hash = keccak(node_data)
        if actual_hash != expected_hash:
            raise ProofError.hash_mismatch(
                f"Node {depth} hashes to 0x{actual_hash.hex()}, "
                f"expected 0x{expected_hash.hex()}"
            )

        node = decode_node(node_data)
        _logger.debug(
            "Proof node %d: %s at nibble %d", depth, node.kind.value, cursor
        )

        if isinstance(node, EmptyNode):
            _log_trailing(proof, depth)
            return None

        if isinstance(node, BranchNode):
            if cursor >= len(key_nibbles):
                _log_trailing(proof, depth)
                return node.value or None

            child = node.children[key_nibbles[cursor]]
            cursor += 1
            if not child:
                _log_trailing(proof, depth)
                return None

            expected_hash = child
            continue

        remaining = key_nibbles[cursor:]

        if node.kind is NodeKind.LEAF:
            _log_trailing(proof, depth)
            if remaining != node.path:
                return None
            return node.target

        # Extension
        if remaining[: len(node.path)] != node.path:
            _log_trailing(proof, depth)
            return None
        if not node.target:
            _log_trailing(proof, depth)
            return None
        if len(node.target) != TrieConstants.HASH_LENGTH:
            raise ProofError.rlp_decoding(
                f"Extension child is {len(node.target)} bytes, expected "
                f"{TrieConstants.HASH_LENGTH}"
            )

        cursor += len(node.path)
        expected_hash = node.target

    raise ProofError.invalid_proof("Proof too short")
