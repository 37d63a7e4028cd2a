"""Hex and hashing helpers for JSON-RPC quantities and event topics."""

from eth_utils import add_0x_prefix, encode_hex, keccak, remove_0x_prefix

from polymer_toolkit.shared.exceptions import Uint64OverflowError, ValidationError
from polymer_toolkit.shared.types import UINT64_MAX

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def hex_to_uint64(value: str) -> int:
    """
    Convert a hex quantity (e.g. "0x1a") to an int that fits in 64 bits.

    Args:
        value: Hex string, with or without the 0x prefix

    Returns:
        int: Decoded value

    Raises:
        ValidationError: If the value is empty or not hex
        Uint64OverflowError: If the value exceeds 2**64 - 1
    """
    if value == "0x0":
        return 0

    if not isinstance(value, str):
        raise ValidationError(f"invalid hex value: {value!r}")

    digits = remove_0x_prefix(value)
    if not digits or not set(digits) <= _HEX_DIGITS:
        raise ValidationError(f"invalid hex value: {value}")

    number = int(digits, 16)
    if number > UINT64_MAX:
        raise Uint64OverflowError(f"hex value too large for uint64: {value}")
    return number


def normalize_tx_hash(tx_hash: str) -> str:
    """Ensure a transaction hash carries the 0x prefix."""
    return add_0x_prefix(tx_hash.strip())


def event_topic_hash(signature: str) -> str:
    """Keccak-256 of an event signature, e.g. Transfer(address,address,uint256)."""
    return encode_hex(keccak(text=signature))
