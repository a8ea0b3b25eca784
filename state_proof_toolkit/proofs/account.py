"""Account and storage proof verification"""

from typing import Optional, Sequence, Union

import rlp
from eth_utils import keccak
from rlp.exceptions import RLPException
from rlp.sedes import Binary, List, big_endian_int

from state_proof_toolkit.proofs.types import AccountData, EthProofResult
from state_proof_toolkit.proofs.verifier import verify_proof
from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.shared.exceptions import ProofError
from state_proof_toolkit.shared.logging import get_logger
from state_proof_toolkit.utils.blockchain import (
    address_to_bytes,
    storage_key_to_bytes,
)

_logger = get_logger(__name__)

_hash32 = Binary.fixed_length(TrieConstants.HASH_LENGTH)

ACCOUNT_SEDES = List([big_endian_int, big_endian_int, _hash32, _hash32])

Address = Union[str, bytes]
StorageKey = Union[int, str, bytes]


def _decode_rlp(data: bytes, what: str):
    try:
        return rlp.decode(data)
    except RLPException as e:
        raise ProofError.rlp_decoding(f"Invalid {what}: {e}") from e


def decode_account(account_rlp: bytes) -> AccountData:
    """
    Decode the RLP account record found at the end of a state proof.

    Args:
        account_rlp (bytes): RLP list (nonce, balance, storageRoot, codeHash).

    Returns:
        AccountData: The decoded account.

    Raises:
        ProofError: RLP_DECODING if the record has any other shape.
    """
    items = _decode_rlp(account_rlp, "account record")
    if (
        isinstance(items, bytes)
        or len(items) != len(ACCOUNT_SEDES)
        or not all(isinstance(item, bytes) for item in items)
    ):
        raise ProofError.rlp_decoding(
            "Invalid account record: expected a list of 4 RLP strings"
        )

    try:
        nonce, balance, storage_root, code_hash = ACCOUNT_SEDES.deserialize(
            items
        )
    except RLPException as e:
        raise ProofError.rlp_decoding(f"Invalid account record: {e}") from e

    return AccountData(
        nonce=nonce,
        balance=balance,
        storage_root=storage_root,
        code_hash=code_hash,
    )


def decode_storage_value(value_rlp: bytes) -> int:
    """Decode the RLP scalar found at the end of a storage proof."""
    item = _decode_rlp(value_rlp, "storage value")
    if not isinstance(item, bytes):
        raise ProofError.rlp_decoding(
            "Invalid storage value: expected an RLP string"
        )
    if len(item) > TrieConstants.HASH_LENGTH:
        raise ProofError.rlp_decoding(
            f"Invalid storage value: {len(item)} bytes exceeds uint256"
        )

    try:
        return big_endian_int.deserialize(item)
    except RLPException as e:
        raise ProofError.rlp_decoding(f"Invalid storage value: {e}") from e


def verify_account_proof(
    state_root: bytes, address: Address, account_proof: Sequence[bytes]
) -> Optional[AccountData]:
    """
    Verify an account proof against a state root.

    Args:
        state_root (bytes): Trusted state root of a block.
        address (Address): Account address, hex string or 20 bytes.
        account_proof (Sequence[bytes]): Raw nodes from ``accountProof``.

    Returns:
        Optional[AccountData]: The account, or None if it does not exist.
    """
    key = keccak(address_to_bytes(address))
    account_rlp = verify_proof(state_root, key, account_proof)
    if account_rlp is None:
        return None
    return decode_account(account_rlp)


def verify_storage_proof(
    storage_root: bytes,
    storage_key: StorageKey,
    storage_proof: Sequence[bytes],
) -> Optional[int]:
    """
    Verify a storage proof against an account's storage root.

    Args:
        storage_root (bytes): ``storage_root`` of a verified account.
        storage_key (StorageKey): Slot as int, hex string or bytes.
        storage_proof (Sequence[bytes]): Raw nodes from ``storageProof[].proof``.

    Returns:
        Optional[int]: The slot value, or None if the slot is not set.
    """
    key = keccak(storage_key_to_bytes(storage_key))
    value_rlp = verify_proof(storage_root, key, storage_proof)
    if value_rlp is None:
        return None
    return decode_storage_value(value_rlp)


def verify_eth_proof(
    state_root: bytes,
    address: Address,
    account_proof: Sequence[bytes],
    storage_key: Optional[StorageKey] = None,
    storage_proof: Optional[Sequence[bytes]] = None,
) -> EthProofResult:
    """
    Verify an account and, optionally, one of its storage slots.

    The storage proof is checked against the storage root of the verified
    account, so a single trusted state root covers both. Storage is only
    verified when both ``storage_key`` and ``storage_proof`` are given.

    Returns:
        EthProofResult: ``(None, None)`` if the account does not exist.

    Raises:
        ProofError: Either proof was rejected.
        ValueError: Only one of ``storage_key`` / ``storage_proof`` given.
    """
    if (storage_key is None) != (storage_proof is None):
        raise ValueError(
            "storage_key and storage_proof must be provided together"
        )

    account = verify_account_proof(state_root, address, account_proof)
    if account is None:
        _logger.debug("Account is absent under the state root")
        return EthProofResult()

    if storage_key is None:
        return EthProofResult(account=account)

    storage_value = verify_storage_proof(
        account.storage_root, storage_key, storage_proof
    )
    return EthProofResult(account=account, storage_value=storage_value)
