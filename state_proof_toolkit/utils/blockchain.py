from typing import Any, Dict, Iterable, List, Union

from eth_abi import encode
from eth_utils import to_canonical_address, to_int
from hexbytes import HexBytes

from state_proof_toolkit.shared.exceptions import ProofResponseException
from state_proof_toolkit.shared.types import (
    AccountProofResponse,
    StorageProofEntry,
)

_MAX_UINT256 = 2**256 - 1


def hex_to_bytes(value: Union[str, bytes]) -> bytes:
    """Convert a 0x-prefixed hex string (or bytes) to bytes"""
    return bytes(HexBytes(value))


def to_proof_nodes(nodes: Iterable[Union[str, bytes]]) -> List[bytes]:
    """Hex-decode the nodes of an ``accountProof`` / ``storageProof[].proof`` array"""
    return [hex_to_bytes(node) for node in nodes]


def address_to_bytes(address: Union[str, bytes]) -> bytes:
    """Return the 20 raw bytes of a hex or checksum address"""
    return to_canonical_address(address)


def quantity_to_int(value: Union[int, str]) -> int:
    """Decode an RPC quantity, given either as int or 0x-prefixed hex"""
    if isinstance(value, int):
        return value
    return to_int(hexstr=value)


def storage_key_to_bytes(key: Union[int, str, bytes]) -> bytes:
    """
    Normalize a storage slot to its 32-byte big-endian form.

    RPCs return slots both padded ("0x00..01") and unpadded ("0x1"), and
    callers often hold them as ints; all three map to the same key.
    """
    if isinstance(key, int):
        slot = key
    elif isinstance(key, str):
        slot = to_int(hexstr=key)
    elif isinstance(key, (bytes, bytearray)):
        if len(key) > 32:
            raise ValueError(
                f"Storage key must be at most 32 bytes, got {len(key)}"
            )
        slot = int.from_bytes(key, byteorder="big")
    else:
        raise TypeError(f"Unsupported storage key type: {type(key).__name__}")

    if not 0 <= slot <= _MAX_UINT256:
        raise ValueError(f"Storage key out of uint256 range: {slot}")
    return encode(["uint256"], [slot])


def parse_proof_response(response: Dict[str, Any]) -> AccountProofResponse:
    """
    Decode an eth_getProof response.

    Accepts the bare result object or a JSON-RPC envelope holding it under
    ``result``.

    Raises:
        ProofResponseException: A field is missing or not decodable.
    """
    try:
        payload = response.get("result", response)
        storage_entries = [
            StorageProofEntry(
                key=storage_key_to_bytes(entry["key"]),
                value=quantity_to_int(entry["value"]),
                proof=to_proof_nodes(entry["proof"]),
            )
            for entry in payload.get("storageProof", [])
        ]
        return AccountProofResponse(
            address=address_to_bytes(payload["address"]),
            nonce=quantity_to_int(payload["nonce"]),
            balance=quantity_to_int(payload["balance"]),
            storage_hash=hex_to_bytes(payload["storageHash"]),
            code_hash=hex_to_bytes(payload["codeHash"]),
            account_proof=to_proof_nodes(payload["accountProof"]),
            storage_proof=storage_entries,
        )
    except KeyError as e:
        raise ProofResponseException(
            f"Missing field in proof response: {e}"
        ) from e
    except (TypeError, ValueError, AttributeError) as e:
        raise ProofResponseException(f"Invalid proof response: {e}") from e
