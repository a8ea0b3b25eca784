from eth_utils import is_address, is_hex, to_checksum_address

from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.utils.blockchain import storage_key_to_bytes


def validate_eth_address(address: str, param_name: str = "address") -> str:
    """Validate and return checksum ethereum address"""
    if not address or not isinstance(address, str):
        raise ValueError(
            f"Invalid {param_name}: address must be a non-empty string"
        )
    if not is_address(address):
        raise ValueError(
            f"Invalid {param_name}: {address} is not a valid Ethereum address"
        )
    return to_checksum_address(address)


def validate_hash32(value: str, param_name: str = "hash") -> str:
    """Validate a 0x-prefixed 32-byte hash and return it lowercased"""
    if not value or not isinstance(value, str) or not is_hex(value):
        raise ValueError(f"Invalid {param_name}: expected a hex string")
    expected_length = 2 + 2 * TrieConstants.HASH_LENGTH
    if not value.startswith("0x") or len(value) != expected_length:
        raise ValueError(
            f"Invalid {param_name}: {value} is not a 0x-prefixed 32-byte hash"
        )
    return value.lower()


def validate_storage_slot(slot: str) -> bytes:
    """Validate a storage slot given as decimal or 0x-prefixed hex"""
    if not slot.isdigit() and not slot.lower().startswith("0x"):
        raise ValueError(
            f"Invalid storage slot: {slot} (expected decimal or 0x hex)"
        )
    try:
        key = int(slot, 10) if slot.isdigit() else slot
        return storage_key_to_bytes(key)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid storage slot: {slot} ({e})") from e
