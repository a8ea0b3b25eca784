"""Nibble codec for trie paths"""

from typing import Sequence, Tuple

from state_proof_toolkit.proofs.types import NodeKind
from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.shared.exceptions import ProofError


def to_nibbles(data: bytes) -> bytes:
    """
    Split every byte into its high and low nibble, in that order.

    Args:
        data (bytes): Raw bytes, usually a keccak-256 hashed key.

    Returns:
        bytes: One item per nibble (values 0-15), twice as long as ``data``.
    """
    return bytes(
        nibble for byte in data for nibble in (byte >> 4, byte & 0x0F)
    )


def _pack_nibbles(nibbles: Sequence[int]) -> bytes:
    return bytes(
        (nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2)
    )


def decode_compact_path(encoded: bytes) -> Tuple[NodeKind, bytes]:
    """
    Decode a hex-prefix (compact) encoded leaf or extension path.

    The high nibble of the first byte holds the flags: bit 1 marks a leaf,
    bit 0 an odd number of path nibbles. For odd paths the low nibble of
    the first byte is the first path nibble, otherwise it is zero padding.

    Args:
        encoded (bytes): The first item of a two-item trie node.

    Returns:
        Tuple[NodeKind, bytes]: LEAF or EXTENSION, and the path nibbles.

    Raises:
        ProofError: INVALID_PATH for an empty path, an unknown flag or
            non-zero padding.
    """
    if not encoded:
        raise ProofError.invalid_path("Empty compact path")

    flag = encoded[0] >> 4
    if flag > TrieConstants.MAX_PATH_FLAG:
        raise ProofError.invalid_path(
            f"Unknown compact path flag 0x{flag:x}"
        )

    kind = NodeKind.LEAF if flag & TrieConstants.LEAF_FLAG else NodeKind.EXTENSION
    nibbles = to_nibbles(encoded[1:])
    if flag & TrieConstants.ODD_FLAG:
        nibbles = bytes([encoded[0] & 0x0F]) + nibbles
    elif encoded[0] & 0x0F:
        raise ProofError.invalid_path(
            f"Non-zero padding nibble in even compact path 0x{encoded[0]:02x}"
        )

    return kind, nibbles


def encode_compact_path(nibbles: Sequence[int], is_leaf: bool) -> bytes:
    """Hex-prefix encode ``nibbles`` (inverse of ``decode_compact_path``)."""
    if any(n < 0 or n > 0x0F for n in nibbles):
        raise ValueError("Nibbles must be in the range 0-15")

    flag = TrieConstants.LEAF_FLAG if is_leaf else 0
    if len(nibbles) % 2:
        flag |= TrieConstants.ODD_FLAG
        return bytes([(flag << 4) | nibbles[0]]) + _pack_nibbles(nibbles[1:])
    return bytes([flag << 4]) + _pack_nibbles(nibbles)
