"""Shared formatting and file utilities for commands."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from state_proof_toolkit.shared.constants import GlobalConstants
from state_proof_toolkit.shared.types import ProofOutput

# Shared console instance
console = Console()


def load_json(file_path: str) -> Any:
    """
    Load and parse a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data
    """
    with open(file_path, "r") as file:
        return json.load(file)


def format_hash(value: Optional[str], length: int = 14) -> str:
    """
    Format a hex hash or address to show first and last characters.

    Args:
        value: Hex string
        length: Total visible characters (default: 14)

    Returns:
        Formatted hash like "0x12345678...abcd"
    """
    if not value:
        return "N/A"
    if len(value) <= length:
        return value
    return f"{value[:10]}...{value[-4:]}"


def save_json_output(
    data: Dict[str, Any],
    filename: str,
    output_dir: Optional[str] = None,
    print_path: bool = True,
) -> str:
    """
    Save data to a JSON file with automatic directory creation.

    Args:
        data: Data to save
        filename: Output filename (can include subdirectories)
        output_dir: Base output directory (default: SPT_OUTPUT_DIR or 'output')
        print_path: Whether to print the saved file path

    Returns:
        Full path to saved file
    """
    output_path = Path(output_dir or GlobalConstants.output_dir())
    filepath = output_path / filename
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)

    if print_path:
        console.print(f"[cyan]Data saved to:[/cyan] {filepath}")

    return str(filepath)


def create_proof_output_table(output: ProofOutput) -> Table:
    """
    Create a Rich table describing a verified proof.

    Args:
        output: Flat verification outcome

    Returns:
        Configured Rich Table with one row per field
    """
    table = Table(
        show_header=True,
        header_style="bold cyan",
        show_lines=False,
        pad_edge=False,
        box=None,
    )
    table.add_column("Field", width=14)
    table.add_column("Value")

    exists = (
        "[green]yes[/green]" if output["exists"] else "[yellow]no[/yellow]"
    )
    table.add_row("Exists", exists)
    if output["exists"]:
        table.add_row("Nonce", str(output["nonce"]))
        table.add_row("Balance", str(output["balance"]))
        table.add_row("Storage root", format_hash(output["storage_root"]))
        table.add_row("Code hash", format_hash(output["code_hash"]))
    if output["storage_value"] is not None:
        table.add_row("Storage value", str(output["storage_value"]))
    return table
