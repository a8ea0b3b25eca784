"""Trie node decoder"""

from dataclasses import dataclass
from typing import Tuple, Union

import rlp
from rlp.exceptions import RLPException

from state_proof_toolkit.proofs.nibbles import decode_compact_path
from state_proof_toolkit.proofs.types import NodeKind
from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.shared.exceptions import ProofError


@dataclass(frozen=True)
class EmptyNode:
    """The RLP empty string: a trie with no entries."""

    kind: NodeKind = NodeKind.EMPTY


@dataclass(frozen=True)
class BranchNode:
    """Sixteen child slots (empty or a 32-byte hash) plus a value slot."""

    children: Tuple[bytes, ...]
    value: bytes
    kind: NodeKind = NodeKind.BRANCH


@dataclass(frozen=True)
class ShortNode:
    """
    Leaf or extension node.

    For a leaf ``target`` is the stored value, for an extension it is the
    hash of the next node (or empty).
    """

    kind: NodeKind
    path: bytes
    target: bytes


TrieNode = Union[EmptyNode, BranchNode, ShortNode]


def _expect_bytes(item, what: str) -> bytes:
    if not isinstance(item, bytes):
        raise ProofError.rlp_decoding(f"Expected RLP string for {what}")
    return item


def _decode_branch(items: list) -> BranchNode:
    children = []
    for index, child in enumerate(items[: TrieConstants.BRANCH_VALUE_INDEX]):
        child = _expect_bytes(child, f"branch child {index}")
        if child and len(child) != TrieConstants.HASH_LENGTH:
            raise ProofError.rlp_decoding(
                f"Branch child {index} is {len(child)} bytes, expected "
                f"{TrieConstants.HASH_LENGTH}"
            )
        children.append(child)

    value = _expect_bytes(
        items[TrieConstants.BRANCH_VALUE_INDEX], "branch value"
    )
    return BranchNode(children=tuple(children), value=value)


def _decode_short(items: list) -> ShortNode:
    encoded_path = _expect_bytes(items[0], "node path")
    target = _expect_bytes(items[1], "node value")
    kind, path = decode_compact_path(encoded_path)
    return ShortNode(kind=kind, path=path, target=target)


def decode_node(raw: bytes) -> TrieNode:
    """
    Decode one RLP-encoded trie node into its structural shape.

    Args:
        raw (bytes): Node bytes exactly as they appear in a proof.

    Returns:
        TrieNode: EmptyNode, BranchNode or ShortNode.

    Raises:
        ProofError: RLP_DECODING for malformed RLP, INVALID_PROOF for a
            list that is neither a branch nor a leaf/extension, INVALID_PATH
            for a bad compact path.
    """
    try:
        items = rlp.decode(raw)
    except RLPException as e:
        raise ProofError.rlp_decoding(f"Malformed trie node: {e}") from e

    if isinstance(items, bytes):
        if not items:
            return EmptyNode()
        raise ProofError.rlp_decoding("Trie node is not an RLP list")

    if len(items) == TrieConstants.BRANCH_NODE_ITEMS:
        return _decode_branch(items)
    if len(items) == TrieConstants.SHORT_NODE_ITEMS:
        return _decode_short(items)

    raise ProofError.invalid_proof(
        f"Invalid node format: {len(items)} items"
    )
