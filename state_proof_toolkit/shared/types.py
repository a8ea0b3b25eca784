"""
Shared type definitions used across the state proof toolkit.
"""

from typing import List, Optional, TypedDict

# =============================================================================
# OUTPUT TYPES
# =============================================================================


class ProofOutput(TypedDict):
    """Flat, JSON friendly outcome of an account (and storage) verification."""

    exists: bool  # Account is present under the state root
    nonce: Optional[int]
    balance: Optional[int]
    storage_root: Optional[str]  # Hex string
    code_hash: Optional[str]  # Hex string
    storage_value: Optional[int]  # Verified storage slot value, if requested


# =============================================================================
# RPC RESPONSE TYPES
# =============================================================================


class StorageProofEntry(TypedDict):
    """One entry of an eth_getProof ``storageProof`` array, hex-decoded."""

    key: bytes  # 32-byte storage slot
    value: int  # Value claimed by the RPC
    proof: List[bytes]  # Raw trie nodes, root first


class AccountProofResponse(TypedDict):
    """An eth_getProof response, hex-decoded."""

    address: bytes  # 20-byte account address
    nonce: int  # Claimed nonce
    balance: int  # Claimed balance
    storage_hash: bytes  # Claimed storage root
    code_hash: bytes  # Claimed code hash
    account_proof: List[bytes]  # Raw trie nodes, root first
    storage_proof: List[StorageProofEntry]


# =============================================================================
# VERIFICATION REPORT TYPES
# =============================================================================


class VerifiedStorageSlot(TypedDict):
    """A storage slot whose value was proven against the account's storage root."""

    key: str  # 32-byte slot, hex string
    value: Optional[int]  # None when the slot is provably unset


class VerifiedProofResponse(TypedDict):
    """Everything proven by one eth_getProof response."""

    address: str  # Checksum address
    account: ProofOutput
    storage: List[VerifiedStorageSlot]
