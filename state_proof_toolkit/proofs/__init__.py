from state_proof_toolkit.proofs.account import (
    decode_account,
    decode_storage_value,
    verify_account_proof,
    verify_eth_proof,
    verify_storage_proof,
)
from state_proof_toolkit.proofs.manager import StateProofVerifier
from state_proof_toolkit.proofs.nibbles import (
    decode_compact_path,
    encode_compact_path,
    to_nibbles,
)
from state_proof_toolkit.proofs.nodes import decode_node
from state_proof_toolkit.proofs.types import (
    AccountData,
    EthProofResult,
    NodeKind,
)
from state_proof_toolkit.proofs.verifier import verify_proof

__all__ = [
    "StateProofVerifier",
    "AccountData",
    "EthProofResult",
    "NodeKind",
    "verify_proof",
    "verify_account_proof",
    "verify_storage_proof",
    "verify_eth_proof",
    "decode_account",
    "decode_storage_value",
    "decode_node",
    "decode_compact_path",
    "encode_compact_path",
    "to_nibbles",
]
