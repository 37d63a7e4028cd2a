from typing import Optional

from polymer_toolkit.shared.exceptions import ValidationError
from polymer_toolkit.shared.types import UINT32_MAX, UINT64_MAX


def parse_uint(value: str, param_name: str, bits: int = 64) -> int:
    """Parse a decimal command-line value as an unsigned integer"""
    maximum = UINT32_MAX if bits == 32 else UINT64_MAX
    text = (value or "").strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(
            f"Invalid {param_name}: {value!r} is not a non-negative integer"
        )
    number = int(text)
    if number > maximum:
        raise ValidationError(
            f"Invalid {param_name}: {number} exceeds the {bits}-bit range"
        )
    return number


def parse_optional_uint(
    value: Optional[str], param_name: str, bits: int = 64
) -> Optional[int]:
    """Parse an optional flag value; empty means not given"""
    if value is None or value == "":
        return None
    return parse_uint(value, param_name, bits)


def validate_rpc_url(rpc_url: Optional[str]) -> str:
    """Require an http(s) RPC URL for hash-based requests"""
    if not rpc_url:
        raise ValidationError(
            "RPC URL is required when using transaction hash"
        )
    if not rpc_url.startswith(("http://", "https://")):
        raise ValidationError(
            f"Invalid rpc_url: {rpc_url} must be an http(s) URL"
        )
    return rpc_url
