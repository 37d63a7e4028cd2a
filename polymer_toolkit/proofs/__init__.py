from polymer_toolkit.proofs.client import ProofServiceClient
from polymer_toolkit.proofs.types import ProofState, ProofStatus

__all__ = [
    "ProofServiceClient",
    "ProofState",
    "ProofStatus",
]
