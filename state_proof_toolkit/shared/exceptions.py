"""
Exception hierarchy for the state proof toolkit.

Exception Categories:
- NonRetryableException: Permanent failures that won't benefit from retry
- ConfigurationException: Unusable configuration values
- ProofError: A supplied proof was rejected (closed set of kinds)
- ProofResponseException: An eth_getProof payload is missing or malformed

Verification is deterministic, so nothing in this package is retryable:
the same inputs always produce the same error.
"""

from enum import Enum


class NonRetryableException(Exception):
    """
    Base class for exceptions that won't benefit from retry.

    Use for permanent failures like:
    - Invalid or tampered proof data
    - Malformed RPC payloads
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationException(NonRetryableException):
    """
    Exception for configuration errors.

    Use when:
    - An environment variable holds an unusable value
    """

    pass


class ProofErrorKind(Enum):
    """Why a proof was rejected."""

    RLP_DECODING = "rlp_decoding"  # Bytes are not the expected RLP structure
    INVALID_PROOF = "invalid_proof"  # Well-formed but inconsistent proof
    HASH_MISMATCH = "hash_mismatch"  # Node does not hash to the expected link
    INVALID_PATH = "invalid_path"  # Unrecognized compact path encoding


class ProofError(NonRetryableException):
    """
    Terminal rejection of a Merkle-Patricia proof.

    The kind is one of the four ProofErrorKind members; callers branch on
    ``error.kind`` rather than on subclasses. Absence of a key is never a
    ProofError.
    """

    def __init__(self, kind: ProofErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return f"ProofError({self.kind.name}, {self.message!r})"

    @classmethod
    def rlp_decoding(cls, message: str) -> "ProofError":
        return cls(ProofErrorKind.RLP_DECODING, message)

    @classmethod
    def invalid_proof(cls, message: str) -> "ProofError":
        return cls(ProofErrorKind.INVALID_PROOF, message)

    @classmethod
    def hash_mismatch(cls, message: str) -> "ProofError":
        return cls(ProofErrorKind.HASH_MISMATCH, message)

    @classmethod
    def invalid_path(cls, message: str) -> "ProofError":
        return cls(ProofErrorKind.INVALID_PATH, message)


class ProofResponseException(NonRetryableException):
    """
    Exception for eth_getProof payloads that cannot be interpreted.

    Raised before any verification happens: missing fields, non-hex
    proof nodes, wrong field types.
    """

    pass
