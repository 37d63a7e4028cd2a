from polymer_toolkit.utils.hex import (
    event_topic_hash,
    hex_to_uint64,
    normalize_tx_hash,
)

__all__ = [
    "event_topic_hash",
    "hex_to_uint64",
    "normalize_tx_hash",
]
