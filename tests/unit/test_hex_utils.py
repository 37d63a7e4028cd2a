"""
Unit tests for hex quantity parsing and event topic hashing.
"""

import pytest

from polymer_toolkit.shared.exceptions import (
    ErrorKind,
    Uint64OverflowError,
    ValidationError,
)
from polymer_toolkit.utils.hex import (
    event_topic_hash,
    hex_to_uint64,
    normalize_tx_hash,
)


class TestHexToUint64:
    """Tests for hex_to_uint64."""

    def test_zero_special_case(self):
        assert hex_to_uint64("0x0") == 0

    @pytest.mark.parametrize(
        "number", [1, 5, 255, 17000000, 11155111, 2**32, 2**64 - 1]
    )
    def test_round_trip(self, number):
        """hex_to_uint64("0x" + hex(n)) == n for 64-bit values."""
        assert hex_to_uint64("0x" + format(number, "x")) == number

    def test_accepts_missing_prefix_and_uppercase(self):
        assert hex_to_uint64("1A") == 26
        assert hex_to_uint64("0xFF") == 255

    def test_rejects_values_over_64_bits(self):
        with pytest.raises(Uint64OverflowError) as exc_info:
            hex_to_uint64("0x" + format(2**64, "x"))

        assert "too large for uint64" in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.parametrize("value", ["", "0x", "0xzz", "12g4", "0x-1"])
    def test_rejects_non_hex(self, value):
        with pytest.raises(ValidationError, match="invalid hex value"):
            hex_to_uint64(value)

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            hex_to_uint64(None)


class TestEventTopicHash:
    """Tests for event signature hashing."""

    def test_transfer_signature(self, transfer_topic):
        assert (
            event_topic_hash("Transfer(address,address,uint256)")
            == transfer_topic
        )

    def test_hash_is_prefixed_lowercase_256_bit(self):
        topic = event_topic_hash("Approval(address,address,uint256)")

        assert topic.startswith("0x")
        assert len(topic) == 66
        assert topic == topic.lower()

    def test_different_signatures_differ(self):
        assert event_topic_hash("Deposit(address,uint256)") != event_topic_hash(
            "Withdrawal(address,uint256)"
        )


class TestNormalizeTxHash:
    """Tests for transaction hash normalization."""

    def test_adds_prefix(self):
        assert normalize_tx_hash("ab" * 32) == "0x" + "ab" * 32

    def test_keeps_existing_prefix(self):
        assert normalize_tx_hash("0x" + "ab" * 32) == "0x" + "ab" * 32

    def test_strips_whitespace(self):
        assert normalize_tx_hash("  0x12 ") == "0x12"
