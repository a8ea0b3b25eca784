"""State Proof Toolkit - verify Ethereum account and storage proofs offline."""

__version__ = "0.1.0"

from .proofs import StateProofVerifier, verify_eth_proof, verify_proof
from .shared.exceptions import ProofError, ProofErrorKind

__all__ = [
    "StateProofVerifier",
    "verify_eth_proof",
    "verify_proof",
    "ProofError",
    "ProofErrorKind",
]
