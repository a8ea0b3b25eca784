"""
Type definitions for state and storage proofs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from state_proof_toolkit.shared.types import ProofOutput

# =============================================================================
# TRIE TYPES
# =============================================================================


class NodeKind(Enum):
    """Structural shape of a decoded trie node."""

    EMPTY = "empty"
    BRANCH = "branch"
    EXTENSION = "extension"
    LEAF = "leaf"


# =============================================================================
# ACCOUNT TYPES
# =============================================================================


@dataclass(frozen=True)
class AccountData:
    """Account record stored in the state trie."""

    nonce: int
    balance: int
    storage_root: bytes  # 32 bytes
    code_hash: bytes  # 32 bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "balance": self.balance,
            "storage_root": "0x" + self.storage_root.hex(),
            "code_hash": "0x" + self.code_hash.hex(),
        }


@dataclass(frozen=True)
class EthProofResult:
    """Verified account and optional storage value."""

    account: Optional[AccountData] = None
    storage_value: Optional[int] = None

    @property
    def exists(self) -> bool:
        return self.account is not None

    def to_output(self) -> ProofOutput:
        if self.account is None:
            return ProofOutput(
                exists=False,
                nonce=None,
                balance=None,
                storage_root=None,
                code_hash=None,
                storage_value=None,
            )
        account = self.account.to_dict()
        return ProofOutput(
            exists=True,
            nonce=account["nonce"],
            balance=account["balance"],
            storage_root=account["storage_root"],
            code_hash=account["code_hash"],
            storage_value=self.storage_value,
        )
