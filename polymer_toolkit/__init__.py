"""Polymer proof toolkit - CLI and Python client for the Polymer Prove API."""

__version__ = "0.1.0"

from .chain import BlockchainResolver, resolve_transaction
from .proofs import ProofServiceClient, ProofState, ProofStatus
from .shared.config import ProofConfig, load_config
from .shared.types import TransactionCoordinates

__all__ = [
    "BlockchainResolver",
    "ProofConfig",
    "ProofServiceClient",
    "ProofState",
    "ProofStatus",
    "TransactionCoordinates",
    "load_config",
    "resolve_transaction",
]
