"""
Shared type definitions used across the Polymer proof toolkit.
"""

from dataclasses import dataclass
from typing import List, TypedDict

from polymer_toolkit.shared.exceptions import ValidationError

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1

# =============================================================================
# BLOCKCHAIN RPC TYPES (hex strings as returned by the node)
# =============================================================================


class LogEntry(TypedDict, total=False):
    """Log entry in a transaction receipt."""

    logIndex: str
    transactionIndex: str
    transactionHash: str
    blockHash: str
    blockNumber: str
    address: str
    data: str
    topics: List[str]  # topics[0] is the event signature hash


class Transaction(TypedDict, total=False):
    """Subset of eth_getTransactionByHash used for resolution."""

    hash: str
    blockNumber: str
    blockHash: str
    to: str
    chainId: str  # Absent on legacy pre-EIP-155 transactions


class TransactionReceipt(TypedDict, total=False):
    """Subset of eth_getTransactionReceipt used for resolution."""

    transactionHash: str
    transactionIndex: str
    blockNumber: str
    blockHash: str
    status: str
    logs: List[LogEntry]


# =============================================================================
# PROOF COORDINATES
# =============================================================================


def _check_uint(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Invalid {name}: expected an integer, got {type(value).__name__}"
        )
    if value < 0 or value > maximum:
        raise ValidationError(
            f"Invalid {name}: {value} is outside [0, {maximum}]"
        )


@dataclass(frozen=True)
class TransactionCoordinates:
    """Location of a single log, as the proving service addresses it."""

    chain_id: int
    block_number: int
    tx_index: int
    log_index: int

    def __post_init__(self):
        _check_uint("chain ID", self.chain_id, UINT64_MAX)
        _check_uint("block number", self.block_number, UINT64_MAX)
        _check_uint("transaction index", self.tx_index, UINT32_MAX)
        _check_uint("log index", self.log_index, UINT32_MAX)

    def as_params(self) -> List[int]:
        """Positional params for log_requestProof."""
        return [self.chain_id, self.block_number, self.tx_index, self.log_index]
