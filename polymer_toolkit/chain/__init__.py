from polymer_toolkit.chain.resolver import BlockchainResolver, resolve_transaction

__all__ = ["BlockchainResolver", "resolve_transaction"]
