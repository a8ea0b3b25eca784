"""
Pytest configuration and shared fixtures.

Proof fixtures are assembled in-process from small hand-built tries, so
every root hash is derived from the node bytes themselves.
"""

from typing import Any, Dict, Optional, Sequence

import pytest
import rlp
from eth_utils import keccak, to_canonical_address

EMPTY_TRIE_ROOT = keccak(rlp.encode(b""))
EMPTY_CODE_HASH = keccak(b"")


def nibbles_of(data: bytes) -> list:
    """Independent nibble split used to lay out fixture tries."""
    out = []
    for byte in data:
        out.extend((byte >> 4, byte & 0x0F))
    return out


def hex_prefix(nibbles: Sequence[int], is_leaf: bool) -> bytes:
    """Independent hex-prefix encoder used to build fixture nodes."""
    flag = 2 if is_leaf else 0
    nibbles = list(nibbles)
    if len(nibbles) % 2:
        first = bytes([((flag + 1) << 4) | nibbles[0]])
        nibbles = nibbles[1:]
    else:
        first = bytes([flag << 4])
    packed = bytes(
        (nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2)
    )
    return first + packed


class TrieNodeFactory:
    """Builds RLP-encoded trie nodes; children are linked by keccak hash."""

    @staticmethod
    def leaf(path: Sequence[int], value: bytes) -> bytes:
        return rlp.encode([hex_prefix(path, True), value])

    @staticmethod
    def extension(path: Sequence[int], child: bytes) -> bytes:
        return rlp.encode([hex_prefix(path, False), keccak(child)])

    @staticmethod
    def branch(
        children: Optional[Dict[int, bytes]] = None, value: bytes = b""
    ) -> bytes:
        slots = [b""] * 16
        for index, child in (children or {}).items():
            slots[index] = keccak(child)
        return rlp.encode(slots + [value])


@pytest.fixture
def nodes() -> TrieNodeFactory:
    """Trie node factory."""
    return TrieNodeFactory()


@pytest.fixture
def empty_trie_root() -> bytes:
    return EMPTY_TRIE_ROOT


@pytest.fixture
def empty_code_hash() -> bytes:
    return EMPTY_CODE_HASH


@pytest.fixture
def sample_address() -> str:
    """Sample externally owned account address for tests."""
    return "0x52f541764E6e90eeBc5c21Ff570De0e2D63766B6"


@pytest.fixture
def sample_contract_address() -> str:
    """Sample contract address for tests."""
    return "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5"


@pytest.fixture
def account_rlp() -> bytes:
    """RLP account record with nonce 0, balance 1000, no storage, no code."""
    return rlp.encode([0, 1000, EMPTY_TRIE_ROOT, EMPTY_CODE_HASH])


@pytest.fixture
def account_trie(sample_address, account_rlp) -> Dict[str, Any]:
    """
    State trie: root branch -> leaf holding ``sample_address``.

    A sibling leaf sits in the next branch slot so the branch has more than
    one child.
    """
    path = nibbles_of(keccak(to_canonical_address(sample_address)))
    slot = path[0]
    sibling_slot = (slot + 1) % 16

    leaf = TrieNodeFactory.leaf(path[1:], account_rlp)
    sibling = TrieNodeFactory.leaf(
        [0] * 63, rlp.encode([5, 5, EMPTY_TRIE_ROOT, EMPTY_CODE_HASH])
    )
    branch = TrieNodeFactory.branch({slot: leaf, sibling_slot: sibling})

    return {
        "address": sample_address,
        "state_root": keccak(branch),
        "proof": [branch, leaf],
        "branch": branch,
        "leaf": leaf,
        "slot": slot,
        "sibling_slot": sibling_slot,
    }


@pytest.fixture
def contract_trie(sample_contract_address) -> Dict[str, Any]:
    """
    State trie with a contract holding two storage slots.

    State trie: extension -> branch -> leaf (contract account).
    Storage trie: branch -> leaf for slot 0 (42) and slot 1 (7).
    """
    storage_values = {0: 42, 1: 7}
    storage_leaves = {}
    storage_children = {}
    for slot, value in storage_values.items():
        path = nibbles_of(keccak(slot.to_bytes(32, "big")))
        leaf = TrieNodeFactory.leaf(path[1:], rlp.encode(value))
        storage_leaves[slot] = leaf
        storage_children[path[0]] = leaf
    storage_branch = TrieNodeFactory.branch(storage_children)
    storage_root = keccak(storage_branch)

    code_hash = keccak(b"contract code")
    account = rlp.encode([1, 0, storage_root, code_hash])

    path = nibbles_of(keccak(to_canonical_address(sample_contract_address)))
    leaf = TrieNodeFactory.leaf(path[3:], account)
    sibling = TrieNodeFactory.leaf(
        [1] * 61, rlp.encode([0, 1, EMPTY_TRIE_ROOT, EMPTY_CODE_HASH])
    )
    branch = TrieNodeFactory.branch(
        {path[2]: leaf, (path[2] + 1) % 16: sibling}
    )
    extension = TrieNodeFactory.extension(path[:2], branch)

    return {
        "address": sample_contract_address,
        "state_root": keccak(extension),
        "account_proof": [extension, branch, leaf],
        "nonce": 1,
        "balance": 0,
        "storage_root": storage_root,
        "code_hash": code_hash,
        "storage_proofs": {
            slot: [storage_branch, storage_leaves[slot]]
            for slot in storage_values
        },
        "storage_values": storage_values,
    }


@pytest.fixture
def proof_response(contract_trie) -> Dict[str, Any]:
    """eth_getProof style response for ``contract_trie`` (hex encoded)."""
    return {
        "address": contract_trie["address"],
        "nonce": hex(contract_trie["nonce"]),
        "balance": hex(contract_trie["balance"]),
        "storageHash": "0x" + contract_trie["storage_root"].hex(),
        "codeHash": "0x" + contract_trie["code_hash"].hex(),
        "accountProof": [
            "0x" + node.hex() for node in contract_trie["account_proof"]
        ],
        "storageProof": [
            {
                "key": hex(slot),
                "value": hex(contract_trie["storage_values"][slot]),
                "proof": ["0x" + node.hex() for node in proof],
            }
            for slot, proof in contract_trie["storage_proofs"].items()
        ],
    }
