#!/usr/bin/env python3
"""
Command line verifier for Ethereum state proofs.

Proofs are verified offline: fetch them with any eth_getProof client, save
the JSON, and check it against a state root you trust.

Examples:
  - Account (and every storage slot in the response)
    state-proof verify --state-root 0x... --proof-file get_proof.json

  - Same, and fail unless the proof is for a given account
    state-proof verify --state-root 0x... --proof-file get_proof.json --address 0x...

  - A single storage slot against a known storage root
    state-proof verify-storage --storage-root 0x... --slot 0x0 --proof-file nodes.json
"""

import argparse
import json
from typing import Any, List, Optional

from state_proof_toolkit.commands.helpers import (
    exit_on_failure,
    handle_command_error,
)
from state_proof_toolkit.commands.validation import (
    validate_eth_address,
    validate_hash32,
    validate_storage_slot,
)
from state_proof_toolkit.proofs import StateProofVerifier
from state_proof_toolkit.shared.exceptions import ConfigurationException
from state_proof_toolkit.utils.formatters import (
    console,
    create_proof_output_table,
    format_hash,
    load_json,
    save_json_output,
)


def _storage_nodes(data: Any) -> List[str]:
    """Accept a bare node list or a ``storageProof`` entry holding one."""
    if isinstance(data, dict) and "proof" in data:
        return data["proof"]
    if isinstance(data, list):
        return data
    raise ValueError(
        "Proof file must contain a list of hex nodes or an object with 'proof'"
    )


def cmd_verify(args: argparse.Namespace) -> None:
    state_root = validate_hash32(args.state_root, "state_root")
    response = load_json(args.proof_file)

    verifier = StateProofVerifier(state_root)
    result = verifier.verify_proof_response(response)
    exit_on_failure(result)
    verified = result.data

    if args.address:
        expected = validate_eth_address(args.address)
        if verified["address"] != expected:
            raise ValueError(
                f"Proof is for {verified['address']}, expected {expected}"
            )

    out = {"state_root": state_root, **verified}
    if args.json:
        console.print_json(json.dumps(out))
    else:
        console.print(
            f"[bold]Account[/bold] {verified['address']} "
            f"under state root {format_hash(state_root)}"
        )
        console.print(create_proof_output_table(verified["account"]))
        for slot in verified["storage"]:
            value = "unset" if slot["value"] is None else slot["value"]
            console.print(f"  slot {format_hash(slot['key'])}: {value}")

    if args.output:
        save_json_output(out, args.output)


def cmd_verify_storage(args: argparse.Namespace) -> None:
    storage_root = validate_hash32(args.storage_root, "storage_root")
    slot = validate_storage_slot(args.slot)
    nodes = _storage_nodes(load_json(args.proof_file))

    result = StateProofVerifier.verify_storage(storage_root, slot, nodes)
    exit_on_failure(result)

    out = {
        "storage_root": storage_root,
        "slot": "0x" + slot.hex(),
        "value": result.data,
    }
    if args.json:
        console.print_json(json.dumps(out))
    elif result.data is None:
        console.print(
            f"[yellow]Slot {format_hash(out['slot'])} is not set[/yellow]"
        )
    else:
        console.print(
            f"Slot {format_hash(out['slot'])}: [green]{result.data}[/green]"
        )

    if args.output:
        save_json_output(out, args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="state-proof",
        description="Verify Ethereum Merkle-Patricia state proofs offline",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # verify
    p_v = sub.add_parser(
        "verify", help="Verify a saved eth_getProof response"
    )
    p_v.add_argument("--state-root", type=str, required=True)
    p_v.add_argument("--proof-file", type=str, required=True)
    p_v.add_argument(
        "--address",
        type=str,
        help="Fail unless the proof is for this account",
    )
    p_v.add_argument("--json", action="store_true", help="Output JSON")
    p_v.add_argument("--output", type=str, help="Output filename")
    p_v.set_defaults(func=cmd_verify)

    # verify-storage
    p_vs = sub.add_parser(
        "verify-storage",
        help="Verify one storage slot against a storage root",
    )
    p_vs.add_argument("--storage-root", type=str, required=True)
    p_vs.add_argument(
        "--slot", type=str, required=True, help="Decimal or 0x hex slot"
    )
    p_vs.add_argument("--proof-file", type=str, required=True)
    p_vs.add_argument("--json", action="store_true", help="Output JSON")
    p_vs.add_argument("--output", type=str, help="Output filename")
    p_vs.set_defaults(func=cmd_verify_storage)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (ValueError, OSError, ConfigurationException) as e:
        handle_command_error(e)


if __name__ == "__main__":
    main()
