from typing import Any, Dict, Iterable, List, Optional, Union

from eth_utils import to_checksum_address

from state_proof_toolkit.proofs.account import (
    verify_account_proof,
    verify_eth_proof,
    verify_storage_proof,
)
from state_proof_toolkit.proofs.types import AccountData, EthProofResult
from state_proof_toolkit.shared.constants import TrieConstants
from state_proof_toolkit.shared.exceptions import (
    ProofError,
    ProofErrorKind,
    ProofResponseException,
)
from state_proof_toolkit.shared.logging import get_logger
from state_proof_toolkit.shared.results import (
    ErrorSeverity,
    ProcessingError,
    Result,
)
from state_proof_toolkit.shared.types import (
    AccountProofResponse,
    VerifiedProofResponse,
    VerifiedStorageSlot,
)
from state_proof_toolkit.utils.blockchain import (
    hex_to_bytes,
    parse_proof_response,
    to_proof_nodes,
)

_logger = get_logger(__name__)

ProofNodes = Iterable[Union[str, bytes]]

_EXPECTED_ERRORS = (ProofError, ProofResponseException, ValueError, TypeError)


def _describe(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


class StateProofVerifier:
    """Verify account and storage proofs against one trusted state root"""

    def __init__(self, state_root: Union[str, bytes]):
        self.state_root = hex_to_bytes(state_root)
        if len(self.state_root) != TrieConstants.HASH_LENGTH:
            raise ValueError(
                f"State root must be {TrieConstants.HASH_LENGTH} bytes, "
                f"got {len(self.state_root)}"
            )

    @staticmethod
    def _failure(
        source: str, error: Exception, context: Dict[str, Any]
    ) -> Result:
        if isinstance(error, ProofError):
            severity = (
                ErrorSeverity.CRITICAL
                if error.kind is ProofErrorKind.HASH_MISMATCH
                else ErrorSeverity.ERROR
            )
            context = {**context, "kind": error.kind.value}
            message = f"Proof rejected: {error}"
        else:
            severity = ErrorSeverity.ERROR
            message = f"Invalid input: {error}"

        _logger.warning("%s (%s)", message, source)
        return Result.fail(
            ProcessingError(
                source=source,
                message=message,
                severity=severity,
                context=context,
                exception=error,
            )
        )

    @staticmethod
    def _contradiction(
        field: str, claimed: Any, proven: Any, context: Dict[str, Any]
    ) -> Result:
        message = f"RPC claims {field}={claimed} but the proof shows {proven}"
        _logger.warning(message)
        return Result.fail(
            ProcessingError(
                source="proof_response",
                message=message,
                severity=ErrorSeverity.CRITICAL,
                context={**context, "field": field},
            )
        )

    def verify_account(
        self, address: Union[str, bytes], account_proof: ProofNodes
    ) -> Result[Optional[AccountData]]:
        """
        Verify an account proof.

        Args:
            address: The account address
            account_proof: ``accountProof`` nodes, hex strings or bytes

        Returns:
            Result[Optional[AccountData]]: Success with the account (None if
            it does not exist), or failure with the rejection reason
        """
        context = {"address": _describe(address)}
        try:
            account = verify_account_proof(
                self.state_root, address, to_proof_nodes(account_proof)
            )
        except _EXPECTED_ERRORS as e:
            return self._failure("account_proof", e, context)
        return Result.ok(account)

    @staticmethod
    def verify_storage(
        storage_root: Union[str, bytes],
        storage_key: Union[int, str, bytes],
        storage_proof: ProofNodes,
    ) -> Result[Optional[int]]:
        """
        Verify a storage proof against an already verified storage root.

        The storage root is the trust anchor, so no state root is needed
        and this can be called on the class itself.

        Args:
            storage_root: ``storage_root`` of a verified account
            storage_key: The storage slot
            storage_proof: ``storageProof[].proof`` nodes, hex strings or bytes

        Returns:
            Result[Optional[int]]: Success with the slot value (None if unset),
            or failure with the rejection reason
        """
        context = {"storage_key": _describe(storage_key)}
        try:
            value = verify_storage_proof(
                hex_to_bytes(storage_root),
                storage_key,
                to_proof_nodes(storage_proof),
            )
        except _EXPECTED_ERRORS as e:
            return StateProofVerifier._failure("storage_proof", e, context)
        return Result.ok(value)

    def verify_eth_proof(
        self,
        address: Union[str, bytes],
        account_proof: ProofNodes,
        storage_key: Optional[Union[int, str, bytes]] = None,
        storage_proof: Optional[ProofNodes] = None,
    ) -> Result[EthProofResult]:
        """
        Verify an account and optionally one storage slot chained to it.

        Returns:
            Result[EthProofResult]: Success with the verified data, or
            failure with the rejection reason
        """
        context = {"address": _describe(address)}
        if storage_key is not None:
            context["storage_key"] = _describe(storage_key)

        try:
            if storage_proof is not None:
                storage_proof = to_proof_nodes(storage_proof)
            result = verify_eth_proof(
                self.state_root,
                address,
                to_proof_nodes(account_proof),
                storage_key,
                storage_proof,
            )
        except _EXPECTED_ERRORS as e:
            return self._failure("eth_proof", e, context)
        return Result.ok(result)

    def verify_proof_response(
        self, response: Dict[str, Any]
    ) -> Result[VerifiedProofResponse]:
        """
        Verify a full eth_getProof response and cross-check its claims.

        The account proof is verified first; the nonce, balance, storage
        hash and code hash reported by the RPC must then match the proven
        account. Every storage entry is verified against the proven storage
        root and its reported value must match the proven one.

        Args:
            response: eth_getProof result (or JSON-RPC envelope)

        Returns:
            Result[VerifiedProofResponse]: Success with everything proven, or
            failure on the first rejected proof or contradicted claim
        """
        try:
            parsed = parse_proof_response(response)
        except ProofResponseException as e:
            return self._failure("proof_response", e, {})

        address = to_checksum_address(parsed["address"])
        context = {"address": address}

        try:
            account = verify_account_proof(
                self.state_root, parsed["address"], parsed["account_proof"]
            )
        except ProofError as e:
            return self._failure("account_proof", e, context)

        contradiction = self._check_account_claims(parsed, account, context)
        if contradiction is not None:
            return contradiction

        storage: List[VerifiedStorageSlot] = []
        for entry in parsed["storage_proof"]:
            key = "0x" + entry["key"].hex()
            slot_context = {**context, "storage_key": key}
            if account is None:
                value = None
            else:
                try:
                    value = verify_storage_proof(
                        account.storage_root, entry["key"], entry["proof"]
                    )
                except ProofError as e:
                    return self._failure("storage_proof", e, slot_context)

            if (value or 0) != entry["value"]:
                return self._contradiction(
                    "value", entry["value"], value or 0, slot_context
                )
            storage.append(VerifiedStorageSlot(key=key, value=value))

        _logger.info(
            "Verified proof for %s (exists=%s, %d storage slot(s))",
            address,
            account is not None,
            len(storage),
        )
        return Result.ok(
            VerifiedProofResponse(
                address=address,
                account=EthProofResult(account=account).to_output(),
                storage=storage,
            )
        )

    def _check_account_claims(
        self,
        parsed: AccountProofResponse,
        account: Optional[AccountData],
        context: Dict[str, Any],
    ) -> Optional[Result]:
        if account is None:
            # A missing account is reported with zero nonce and balance
            claims = [
                ("nonce", parsed["nonce"], 0),
                ("balance", parsed["balance"], 0),
            ]
        else:
            claims = [
                ("nonce", parsed["nonce"], account.nonce),
                ("balance", parsed["balance"], account.balance),
                (
                    "storageHash",
                    "0x" + parsed["storage_hash"].hex(),
                    "0x" + account.storage_root.hex(),
                ),
                (
                    "codeHash",
                    "0x" + parsed["code_hash"].hex(),
                    "0x" + account.code_hash.hex(),
                ),
            ]

        for field, claimed, proven in claims:
            if claimed != proven:
                return self._contradiction(field, claimed, proven, context)
        return None
