from state_proof_toolkit.utils.blockchain import (
    address_to_bytes,
    hex_to_bytes,
    parse_proof_response,
    quantity_to_int,
    storage_key_to_bytes,
    to_proof_nodes,
)

__all__ = [
    "address_to_bytes",
    "hex_to_bytes",
    "parse_proof_response",
    "quantity_to_int",
    "storage_key_to_bytes",
    "to_proof_nodes",
]
