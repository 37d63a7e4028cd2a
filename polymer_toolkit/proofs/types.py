"""
Type definitions for proof jobs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from polymer_toolkit.shared.exceptions import DecodeError

# =============================================================================
# ENUMS
# =============================================================================


class ProofState(Enum):
    """Lifecycle state of a proof job on the proving service."""

    PENDING = "pending"  # Queued
    PROCESSING = "processing"  # Being generated
    COMPLETED = "completed"  # Proof attached
    FAILED = "failed"  # Error attached


# Wire status -> state; both spellings of completion are in use
STATUS_ALIASES: Dict[str, ProofState] = {
    "pending": ProofState.PENDING,
    "processing": ProofState.PROCESSING,
    "complete": ProofState.COMPLETED,
    "completed": ProofState.COMPLETED,
    "failed": ProofState.FAILED,
}


# =============================================================================
# STATUS SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class ProofStatus:
    """One observation of a proof job, as returned by log_queryProof."""

    status: str
    proof: Any = None
    error: Optional[str] = None

    @property
    def state(self) -> Optional[ProofState]:
        """Parsed state, or None for a status string outside the known set."""
        return STATUS_ALIASES.get(self.status)

    @property
    def is_completed(self) -> bool:
        return self.state is ProofState.COMPLETED

    @property
    def is_pending(self) -> bool:
        return self.state in (ProofState.PENDING, ProofState.PROCESSING)

    @classmethod
    def from_result(cls, result: Any) -> "ProofStatus":
        """Decode the JSON-RPC result of log_queryProof."""
        if not isinstance(result, dict):
            raise DecodeError(
                f"unexpected status response type: {type(result).__name__}"
            )

        status = result.get("status")
        if not isinstance(status, str):
            raise DecodeError(f"status response has no status: {result!r}")

        error = result.get("error")
        if error is not None and not isinstance(error, str):
            raise DecodeError(f"status response has invalid error: {error!r}")

        return cls(status=status, proof=result.get("proof"), error=error or None)
