"""Shared formatting and console utilities for commands."""

import json
from typing import Any

from rich.console import Console

# Shared console instances; results go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


def render_proof(proof: Any, raw: bool) -> str:
    """
    Render a proof payload for output.

    Args:
        proof: Decoded JSON value of the proof field
        raw: Raw output prints a string proof without quotes and any other
            value as compact JSON (a missing proof renders as nothing);
            otherwise the JSON is indented

    Returns:
        Rendered proof text
    """
    if raw:
        if proof is None:
            return ""
        if isinstance(proof, str):
            return proof
        return json.dumps(proof, separators=(",", ":"))
    return json.dumps(proof, indent=2)


def print_proof(proof: Any, raw: bool) -> None:
    """Write a proof to stdout without markup, highlighting or wrapping."""
    text = render_proof(proof, raw)
    if raw:
        console.out(text, highlight=False, end="")
    else:
        console.out(text, highlight=False)


def print_line(text: str) -> None:
    """Write a plain result line to stdout."""
    console.out(text, highlight=False)
